"""EVE Online public character data models."""

from pydantic import BaseModel, ConfigDict, Field


class EveCharacter(BaseModel):
    """Public character record from ESI ``/characters/{character_id}/``."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, description="Character name")
    corporation_id: int = Field(..., description="Current corporation of the character")
    alliance_id: int | None = Field(
        None, description="Current alliance, absent when the corporation has none"
    )


class EveResolvedName(BaseModel):
    """One entry of an ESI ``/universe/ids/`` lookup section."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
