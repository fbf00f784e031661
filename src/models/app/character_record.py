"""Per-character aggregate returned to the browser."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.eve import FleetAnalysis
from models.zkill import KillboardStats


class CharacterRef(BaseModel):
    """A character resolved from a name lookup."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class AffiliationInfo(BaseModel):
    """Corporation or alliance summary shown on a character card."""

    id: int
    name: str
    ticker: str
    logo: str = Field(..., description="Logo image URL")


class CharacterRecord(BaseModel):
    """Everything known about one character after enrichment.

    Optional parts are None when the upstream lookup was unavailable.
    """

    model_config = ConfigDict(populate_by_name=True)

    character_id: int = Field(..., alias="characterId")
    name: str
    portrait: str
    killboard_stats: KillboardStats = Field(
        default_factory=KillboardStats, alias="killboardStats"
    )
    corporation: AffiliationInfo | None = None
    alliance: AffiliationInfo | None = None
    fleet_analysis: FleetAnalysis | None = Field(None, alias="fleetAnalysis")
    pilot_profile: str | None = Field(None, alias="pilotProfile")

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using the browser's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
