"""Rule-based character tags from killboard statistics.

Each axis is independent, so a character can carry one tag per axis:

- gang/solo: GANG at gang ratio >= 90, SOLO at <= 30
- danger: VERY DANGEROUS >= 75, DANGEROUS >= 50, VERY SNUGGLY <= 15,
  SNUGGLY <= 25, checked in that order
- economy: CAREBEAR when ISK destroyed/lost < 0.2 with more than 10 losses
- space: HIGHSEC, LOWSEC or NULLSEC at >= 80% of kills there, else WORMHOLE
  at >= 50%
- role: HAULER when a recent ship looks like a hauler

Absent values never produce a tag.
"""

from models.app import Tag, TagCategory
from models.zkill import KillboardStats

GANG_MIN_RATIO = 90
SOLO_MAX_RATIO = 30
VERY_DANGEROUS_MIN_RATIO = 75
DANGEROUS_MIN_RATIO = 50
VERY_SNUGGLY_MAX_RATIO = 15
SNUGGLY_MAX_RATIO = 25
CAREBEAR_MAX_ISK_RATIO = 0.2
CAREBEAR_MIN_SHIPS_LOST = 10
KNOWN_SPACE_MIN_KILLS_RATIO = 80
WORMHOLE_MIN_KILLS_RATIO = 50

FREIGHTER_MARKERS = ("Freighter",)
INDUSTRIAL_MARKERS = ("Industrial", "Transport", "Blockade Runner")


def is_hauler_ship(ship_name: str) -> bool:
    """Whether a ship name suggests a hauling hull.

    Plain substring matching on the display name.
    """
    return any(marker in ship_name for marker in FREIGHTER_MARKERS) or any(
        marker in ship_name for marker in INDUSTRIAL_MARKERS
    )


def _gang_tag(stats: KillboardStats) -> Tag | None:
    ratio = stats.gang_ratio
    if ratio is None:
        return None
    if ratio >= GANG_MIN_RATIO:
        return Tag(text="GANG", category=TagCategory.GANG)
    if ratio <= SOLO_MAX_RATIO:
        return Tag(text="SOLO", category=TagCategory.SOLO)
    return None


def _danger_tag(stats: KillboardStats) -> Tag | None:
    ratio = stats.danger_ratio
    if ratio is None:
        return None
    if ratio >= VERY_DANGEROUS_MIN_RATIO:
        return Tag(text="VERY DANGEROUS", category=TagCategory.VERY_DANGEROUS)
    if ratio >= DANGEROUS_MIN_RATIO:
        return Tag(text="DANGEROUS", category=TagCategory.DANGEROUS)
    if ratio <= VERY_SNUGGLY_MAX_RATIO:
        return Tag(text="VERY SNUGGLY", category=TagCategory.VERY_SNUGGLY)
    if ratio <= SNUGGLY_MAX_RATIO:
        return Tag(text="SNUGGLY", category=TagCategory.SNUGGLY)
    return None


def _carebear_tag(stats: KillboardStats) -> Tag | None:
    # Zero counts as missing here, which also rules out dividing by zero
    if not stats.isk_destroyed or not stats.isk_lost:
        return None
    if stats.ships_lost is None:
        return None
    isk_ratio = stats.isk_destroyed / stats.isk_lost
    if isk_ratio < CAREBEAR_MAX_ISK_RATIO and stats.ships_lost > CAREBEAR_MIN_SHIPS_LOST:
        return Tag(text="CAREBEAR", category=TagCategory.CAREBEAR)
    return None


def _space_tag(stats: KillboardStats) -> Tag | None:
    for region, text, category in (
        ("highsec", "HIGHSEC", TagCategory.HIGHSEC),
        ("lowsec", "LOWSEC", TagCategory.LOWSEC),
        ("nullsec", "NULLSEC", TagCategory.NULLSEC),
    ):
        ratio = stats.region_ratio(region)
        if ratio is not None and ratio >= KNOWN_SPACE_MIN_KILLS_RATIO:
            return Tag(text=text, category=category)

    ratio = stats.region_ratio("wormhole")
    if ratio is not None and ratio >= WORMHOLE_MIN_KILLS_RATIO:
        return Tag(text="WORMHOLE", category=TagCategory.WORMHOLE)
    return None


def _role_tag(stats: KillboardStats) -> Tag | None:
    if any(is_hauler_ship(ship.ship_name) for ship in stats.ship_usage()):
        return Tag(text="HAULER", category=TagCategory.HAULER)
    return None


RULES = (_gang_tag, _danger_tag, _carebear_tag, _space_tag, _role_tag)


def classify_tags(stats: KillboardStats | None) -> list[Tag]:
    """Derive descriptive tags from killboard stats.

    Args:
        stats: Stats of one character; None yields no tags

    Returns:
        Tags in axis order (gang, danger, economy, space, role)
    """
    if stats is None:
        return []
    return [tag for rule in RULES if (tag := rule(stats)) is not None]
