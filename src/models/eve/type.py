"""EVE Online type data models."""

from pydantic import BaseModel, ConfigDict, Field


class EveType(BaseModel):
    """An inventory type as returned by ESI ``/universe/types/{type_id}/``.

    Only the fields needed to label ships are modelled; the rest of the
    payload is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    type_id: int = Field(..., ge=0, description="The unique identifier for the type.")
    name: str = Field(..., description="The display name of the type.")
    group_id: int | None = Field(
        None, ge=0, description="The ID of the group to which the type belongs."
    )
    published: bool | None = Field(
        None, description="Whether the type is published in the game."
    )
