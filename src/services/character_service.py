"""Character lookups against ESI and zKillboard.

Every public coroutine here is a best-effort lookup: upstream failures are
logged and turned into an "unavailable" value (None, an empty list or a
placeholder name) so callers never see transport errors.
"""

import logging

from data.clients import ESIClient, ZKillboardClient
from models.app import AffiliationInfo, CharacterRef
from models.eve import EveCharacter, EveKillmail, ShipUsageEntry
from models.zkill import KillboardStats, ZKillEntry
from utils.exceptions import DataProviderError

logger = logging.getLogger(__name__)

UNKNOWN_SHIP_NAME = "Unknown Ship"
DEFAULT_IMAGE_BASE_URL = "https://images.evetech.net"
DEFAULT_RECENT_KILL_WINDOW = 5


class CharacterService:
    """Service for per-character lookups."""

    def __init__(
        self,
        esi_client: ESIClient,
        zkill_client: ZKillboardClient,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        recent_kill_window: int = DEFAULT_RECENT_KILL_WINDOW,
    ):
        """Initialize character service.

        Args:
            esi_client: ESI client instance (required via DI)
            zkill_client: zKillboard client instance (required via DI)
            image_base_url: Base URL for logos
            recent_kill_window: How many recent killmails to inspect
        """
        self._esi = esi_client
        self._zkill = zkill_client
        self._image_base_url = image_base_url.rstrip("/")
        self.recent_kill_window = recent_kill_window

    async def resolve_names(self, names: list[str]) -> list[CharacterRef]:
        """Resolve character names to IDs.

        Names are trimmed and blank ones dropped. Unmatched names are simply
        absent from the result.

        Args:
            names: Character names as typed by the user

        Returns:
            Matched characters, empty on failure
        """
        cleaned = [name.strip() for name in names if name and name.strip()]
        if not cleaned:
            return []
        try:
            resolved = await self._esi.universe.resolve_character_names(cleaned)
        except DataProviderError as e:
            logger.error("Error fetching character IDs: %s", e)
            return []
        return [CharacterRef(id=entry.id, name=entry.name) for entry in resolved]

    async def get_killboard_stats(self, character_id: int) -> KillboardStats | None:
        """Get killboard statistics, or None if unavailable."""
        try:
            return await self._zkill.get_character_stats(character_id)
        except DataProviderError as e:
            logger.error(
                "Error fetching killboard stats for %d: %s", character_id, e
            )
            return None

    async def _get_public_character(self, character_id: int) -> EveCharacter:
        return await self._esi.characters.get_character(character_id)

    async def get_corporation(self, character_id: int) -> AffiliationInfo | None:
        """Get the character's corporation, or None if unavailable."""
        try:
            character = await self._get_public_character(character_id)
            corp_id = character.corporation_id
            corporation = await self._esi.corporations.get_corporation(corp_id)
        except DataProviderError as e:
            logger.error(
                "Error fetching corporation info for %d: %s", character_id, e
            )
            return None
        return AffiliationInfo(
            id=corp_id,
            name=corporation.name,
            ticker=corporation.ticker,
            logo=f"{self._image_base_url}/corporations/{corp_id}/logo",
        )

    async def get_alliance(self, character_id: int) -> AffiliationInfo | None:
        """Get the character's alliance.

        Returns:
            Alliance info, or None when the character has no alliance or the
            lookup failed
        """
        try:
            character = await self._get_public_character(character_id)
            alliance_id = character.alliance_id
            if alliance_id is None:
                return None
            alliance = await self._esi.alliances.get_alliance(alliance_id)
        except DataProviderError as e:
            logger.error("Error fetching alliance info for %d: %s", character_id, e)
            return None
        return AffiliationInfo(
            id=alliance_id,
            name=alliance.name,
            ticker=alliance.ticker,
            logo=f"{self._image_base_url}/alliances/{alliance_id}/logo",
        )

    async def get_recent_kill_entries(
        self, character_id: int
    ) -> list[ZKillEntry] | None:
        """Get the newest kill list entries, bounded to the recent window.

        Returns:
            At most ``recent_kill_window`` entries in zKillboard order, or
            None when the kill list is unavailable
        """
        try:
            entries = await self._zkill.get_recent_kills(
                character_id, limit=self.recent_kill_window
            )
        except DataProviderError as e:
            logger.error("Error fetching recent kills for %d: %s", character_id, e)
            return None
        if entries is None:
            return None
        return entries[: self.recent_kill_window]

    async def get_killmail(self, entry: ZKillEntry) -> EveKillmail | None:
        """Fetch the ESI detail for a kill list entry, or None on failure."""
        try:
            return await self._esi.killmails.get_killmail(
                entry.killmail_id, entry.zkb.hash
            )
        except DataProviderError as e:
            logger.error("Error processing killmail %d: %s", entry.killmail_id, e)
            return None

    async def get_recent_ships(self, character_id: int) -> list[ShipUsageEntry]:
        """Ships the character flew in recent killmails, deduplicated by type.

        The victim's ship is used for losses; otherwise the character's own
        attacker entry, if it has a ship.
        """
        entries = await self.get_recent_kill_entries(character_id)
        if not entries:
            return []

        ships: list[ShipUsageEntry] = []
        seen: set[int] = set()
        for entry in entries:
            killmail = await self.get_killmail(entry)
            if killmail is None:
                continue

            if killmail.victim.character_id == character_id:
                ship_type_id = killmail.victim.ship_type_id
            else:
                attacker = killmail.attacker_for(character_id)
                ship_type_id = attacker.ship_type_id if attacker else None

            if ship_type_id is None or ship_type_id in seen:
                continue
            seen.add(ship_type_id)
            ships.append(
                ShipUsageEntry(
                    ship_type_id=ship_type_id,
                    ship_name=await self.get_ship_name(ship_type_id),
                )
            )
        return ships

    async def get_ship_name(self, ship_type_id: int) -> str:
        """Display name of a ship type, or a placeholder if unavailable."""
        try:
            ship_type = await self._esi.universe.get_type(ship_type_id)
        except DataProviderError as e:
            logger.error("Error fetching ship name for %d: %s", ship_type_id, e)
            return UNKNOWN_SHIP_NAME
        return ship_type.name

    async def close(self) -> None:
        """Close the underlying clients."""
        await self._esi.close()
        await self._zkill.close()
