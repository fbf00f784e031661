"""Plain-text character cards for the command line.

A card mirrors what the browser page shows for one character: name and tags,
affiliation, combat stats, the pilot profile, recently used ships and the
possible gang composition.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from models.app import AffiliationInfo, CharacterRecord, Tag
from services.tag_service import DANGEROUS_MIN_RATIO, classify_tags
from utils.formatting import format_isk_short, format_stat

ZKILL_SITE_URL = "https://zkillboard.com"
IMAGE_BASE_URL = "https://images.evetech.net"

NO_ALLIANCE = "No Alliance"
NO_RECENT_ACTIVITY = "No recent activity"


class CardShip(BaseModel):
    """One ship line on a card."""

    label: str
    icon: str


class CharacterCard(BaseModel):
    """Display-ready view of a ``CharacterRecord``."""

    name: str
    portrait: str
    zkill_url: str
    dangerous: bool = False
    tags: list[Tag] = Field(default_factory=list)
    corporation: str = "N/A"
    alliance: str | None = None
    stats: list[tuple[str, str]] = Field(default_factory=list)
    pilot_profile: str | None = None
    recent_ships: list[CardShip] = Field(default_factory=list)
    gang_composition: list[CardShip] = Field(default_factory=list)


def ship_icon_url(ship_type_id: int, image_base_url: str = IMAGE_BASE_URL) -> str:
    return f"{image_base_url.rstrip('/')}/types/{ship_type_id}/icon"


def _affiliation_label(
    info: AffiliationInfo | None, fallback: str | None
) -> str | None:
    if info is None:
        return fallback
    return f"{info.name} [{info.ticker}]"


def build_card(
    record: CharacterRecord,
    zkill_site_url: str = ZKILL_SITE_URL,
    image_base_url: str = IMAGE_BASE_URL,
) -> CharacterCard:
    """Turn an enriched record into a card.

    Args:
        record: Aggregate record returned by the enrichment pipeline
        zkill_site_url: zKillboard website root for the profile link
        image_base_url: Image server root for ship icons

    Returns:
        The card; absent stats read "N/A"
    """
    stats = record.killboard_stats
    danger = stats.danger_ratio

    stat_lines = [
        ("Danger Ratio", format_stat(stats.danger_ratio)),
        ("Gang Ratio", format_stat(stats.gang_ratio)),
        ("Ships Destroyed", format_stat(stats.ships_destroyed)),
        ("Ships Lost", format_stat(stats.ships_lost)),
    ]
    if stats.isk_destroyed is not None:
        stat_lines.append(("ISK Destroyed", format_isk_short(stats.isk_destroyed)))
    if stats.isk_lost is not None:
        stat_lines.append(("ISK Lost", format_isk_short(stats.isk_lost)))

    members = record.fleet_analysis.fleet_members if record.fleet_analysis else []

    return CharacterCard(
        name=record.name,
        portrait=record.portrait,
        zkill_url=f"{zkill_site_url.rstrip('/')}/character/{record.character_id}/",
        dangerous=danger is not None and danger >= DANGEROUS_MIN_RATIO,
        tags=classify_tags(stats),
        corporation=_affiliation_label(record.corporation, "N/A"),
        alliance=_affiliation_label(record.alliance, None),
        stats=stat_lines,
        pilot_profile=record.pilot_profile,
        recent_ships=[
            CardShip(
                label=ship.ship_name,
                icon=ship_icon_url(ship.ship_type_id, image_base_url),
            )
            for ship in stats.ship_usage()
        ],
        gang_composition=[
            CardShip(
                label=f"{member.count}x {member.ship_name}",
                icon=ship_icon_url(member.ship_type_id, image_base_url),
            )
            for member in members
        ],
    )


def render_card(card: CharacterCard) -> str:
    """Render a card as indented text."""
    header = card.name
    if card.dangerous:
        header = f"{header} (!)"
    lines = [header]
    if card.tags:
        lines.append("  " + " ".join(f"[{tag.text}]" for tag in card.tags))

    lines.append(f"  Corporation: {card.corporation}")
    if card.alliance is None:
        lines.append(f"  {NO_ALLIANCE}")
    else:
        lines.append(f"  Alliance: {card.alliance}")

    if card.pilot_profile:
        lines.append("")
        lines.extend(f"  {line}" for line in card.pilot_profile.splitlines())

    lines.append("")
    lines.extend(f"  {label}: {value}" for label, value in card.stats)

    lines.append("")
    lines.append("  Recently Used Ships:")
    if card.recent_ships:
        lines.extend(f"    - {ship.label}" for ship in card.recent_ships)
    else:
        lines.append(f"    - {NO_RECENT_ACTIVITY}")

    if card.gang_composition:
        lines.append("  Possible Gang Composition:")
        lines.extend(f"    - {ship.label}" for ship in card.gang_composition)

    lines.append(f"  zKillboard: {card.zkill_url}")
    return "\n".join(lines)


def render_character_card(
    record: CharacterRecord,
    zkill_site_url: str = ZKILL_SITE_URL,
    image_base_url: str = IMAGE_BASE_URL,
) -> str:
    return render_card(build_card(record, zkill_site_url, image_base_url))
