"""Descriptive character tags."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class TagCategory(StrEnum):
    """Tag categories, doubling as CSS class names on the browser page."""

    GANG = "gang"
    SOLO = "solo"
    VERY_DANGEROUS = "very-dangerous"
    DANGEROUS = "dangerous"
    VERY_SNUGGLY = "very-snuggly"
    SNUGGLY = "snuggly"
    CAREBEAR = "carebear"
    HIGHSEC = "highsec"
    LOWSEC = "lowsec"
    NULLSEC = "nullsec"
    WORMHOLE = "wormhole"
    HAULER = "hauler"


class Tag(BaseModel):
    """A label such as "SOLO" or "HAULER" derived from killboard stats."""

    model_config = ConfigDict(frozen=True)

    text: str
    category: TagCategory
