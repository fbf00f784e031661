"""Application models (domain layer)."""

from .character_record import AffiliationInfo, CharacterRecord, CharacterRef
from .tag import Tag, TagCategory

__all__ = [
    "AffiliationInfo",
    "CharacterRecord",
    "CharacterRef",
    "Tag",
    "TagCategory",
]
