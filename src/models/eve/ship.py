"""Ship usage models derived from killmails."""

from pydantic import BaseModel, ConfigDict, Field


class ShipUsageEntry(BaseModel):
    """A ship type a character flew in a recent killmail.

    Serialized as ``{"id", "name"}`` for the browser page.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ship_type_id: int = Field(..., alias="id")
    ship_name: str = Field(..., alias="name")


class FleetMember(BaseModel):
    """How often a ship type showed up among recent attackers."""

    model_config = ConfigDict(populate_by_name=True)

    ship_type_id: int = Field(..., alias="shipId")
    ship_name: str = Field(..., alias="shipName")
    count: int = Field(1, ge=1)


class FleetAnalysis(BaseModel):
    """Estimated gang composition, most frequent ship types first."""

    model_config = ConfigDict(populate_by_name=True)

    fleet_members: list[FleetMember] = Field(
        default_factory=list, alias="fleetMembers"
    )
