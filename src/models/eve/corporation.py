"""EVE Online corporation and alliance data models."""

from pydantic import BaseModel, ConfigDict, Field


class EveCorporation(BaseModel):
    """Public corporation record from ESI ``/corporations/{corporation_id}/``."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Corporation name")
    ticker: str = Field(..., description="Short corporation ticker")
    alliance_id: int | None = Field(None, description="Alliance the corporation is in")
    member_count: int | None = Field(None, ge=0, description="Number of members")


class EveAlliance(BaseModel):
    """Public alliance record from ESI ``/alliances/{alliance_id}/``."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Alliance name")
    ticker: str = Field(..., description="Short alliance ticker")
    executor_corporation_id: int | None = Field(
        None, description="Corporation holding the executor role"
    )
