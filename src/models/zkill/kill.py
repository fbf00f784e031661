"""zKillboard kill list models."""

from pydantic import BaseModel, ConfigDict, Field


class ZKillMeta(BaseModel):
    """The ``zkb`` block attached to every zKillboard kill list entry."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hash: str = Field(..., description="Killmail hash needed to fetch the ESI detail")
    total_value: float | None = Field(None, alias="totalValue")
    npc: bool | None = None
    solo: bool | None = None


class ZKillEntry(BaseModel):
    """One entry of ``/api/characterID/{id}/``, newest first."""

    model_config = ConfigDict(extra="ignore")

    killmail_id: int
    zkb: ZKillMeta
