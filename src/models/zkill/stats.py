"""zKillboard character statistics models.

Every numeric field is optional. A value that is missing or does not parse
as a finite number is stored as ``None`` and means "unknown", never zero.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.eve.ship import ShipUsageEntry

SHIP_TYPE_LIST = "shipType"


def parse_number(value: Any) -> float | None:
    """Parse ``value`` as a finite float, returning None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_count(value: Any) -> int | float | None:
    """Parse a count; whole numbers become ints, fractions are kept as is."""
    number = parse_number(value)
    if number is None:
        return None
    return int(number) if number.is_integer() else number


class RegionActivity(BaseModel):
    """Activity share for one space type (highsec, lowsec, nullsec, wormhole)."""

    model_config = ConfigDict(extra="allow")

    kills_ratio: float | None = None

    @field_validator("kills_ratio", mode="before")
    @classmethod
    def _coerce_ratio(cls, v: Any) -> float | None:
        return parse_number(v)


class TopList(BaseModel):
    """A ranked list attached to the stats, e.g. recently used ship types."""

    type: str
    values: list[ShipUsageEntry] = Field(default_factory=list)


class KillboardStats(BaseModel):
    """Aggregate killboard statistics for one character.

    Unknown upstream keys are kept so they reach the browser unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    danger_ratio: float | None = Field(None, alias="dangerRatio")
    gang_ratio: float | None = Field(None, alias="gangRatio")
    isk_destroyed: float | None = Field(None, alias="iskDestroyed")
    isk_lost: float | None = Field(None, alias="iskLost")
    ships_destroyed: int | float | None = Field(None, alias="shipsDestroyed")
    ships_lost: int | float | None = Field(None, alias="shipsLost")
    groups: dict[str, RegionActivity] | None = None
    top_lists: list[TopList] = Field(default_factory=list, alias="topLists")

    @field_validator("danger_ratio", "gang_ratio", "isk_destroyed", "isk_lost", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> float | None:
        return parse_number(v)

    @field_validator("ships_destroyed", "ships_lost", mode="before")
    @classmethod
    def _coerce_count(cls, v: Any) -> int | float | None:
        return parse_count(v)

    @field_validator("groups", mode="before")
    @classmethod
    def _drop_malformed_groups(cls, v: Any) -> dict | None:
        if not isinstance(v, dict):
            return None
        return {str(k): g for k, g in v.items() if isinstance(g, dict)}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> KillboardStats:
        """Build stats from a raw zKillboard payload.

        The upstream ``topLists`` are dropped; they are replaced by locally
        derived ship usage.
        """
        data = {k: v for k, v in payload.items() if k != "topLists"}
        return cls.model_validate(data)

    def region_ratio(self, region: str) -> float | None:
        """Kills ratio for ``region`` or None when unknown."""
        if not self.groups:
            return None
        activity = self.groups.get(region)
        return activity.kills_ratio if activity else None

    def ship_usage(self) -> list[ShipUsageEntry]:
        """Ships from the ``shipType`` top list, empty when there is none."""
        for top_list in self.top_lists:
            if top_list.type == SHIP_TYPE_LIST:
                return top_list.values
        return []

    def with_ship_usage(self, ships: list[ShipUsageEntry]) -> KillboardStats:
        """Copy of these stats whose top lists hold only ``ships``."""
        return self.model_copy(
            update={"top_lists": [TopList(type=SHIP_TYPE_LIST, values=list(ships))]}
        )
