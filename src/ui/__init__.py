"""Text presentation of enriched character records."""

from .character_card import (
    CharacterCard,
    build_card,
    render_card,
    render_character_card,
    ship_icon_url,
)

__all__ = [
    "CharacterCard",
    "build_card",
    "render_card",
    "render_character_card",
    "ship_icon_url",
]
