"""Per-character enrichment pipeline.

For every resolved character five independent lookups run concurrently:
killboard stats, corporation, alliance, recent ships and the fleet estimate.
Each lookup settles to its own result or default, so one failure never
cancels the others. The pilot profile is requested once they have all
settled; a failing profile only leaves ``pilot_profile`` empty. The pieces
are joined into a ``CharacterRecord``.

Characters are processed concurrently with no cap. A character whose
assembly fails unexpectedly is dropped from the batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, TypeVar

from models.app import CharacterRecord, CharacterRef
from models.zkill import KillboardStats

if TYPE_CHECKING:
    from services.character_service import CharacterService
    from services.fleet_service import FleetService
    from services.profile_service import ProfileService

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_IMAGE_BASE_URL = "https://images.evetech.net"


async def settle(awaitable: Awaitable[T], default: T, label: str) -> T:
    """Await ``awaitable``, returning ``default`` if it raises."""
    try:
        return await awaitable
    except Exception:
        logger.exception("Lookup %s failed; using default", label)
        return default


class EnrichmentService:
    """Builds aggregate character records from the individual lookups."""

    def __init__(
        self,
        character_service: CharacterService,
        fleet_service: FleetService,
        profile_service: ProfileService,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
    ):
        self._characters = character_service
        self._fleet = fleet_service
        self._profiles = profile_service
        self._image_base_url = image_base_url.rstrip("/")

    def portrait_url(self, character_id: int) -> str:
        return f"{self._image_base_url}/characters/{character_id}/portrait"

    async def enrich_character(self, ref: CharacterRef) -> CharacterRecord:
        """Run all lookups for one character and assemble its record."""
        cid = ref.id
        stats, corporation, alliance, recent_ships, fleet = await asyncio.gather(
            settle(self._characters.get_killboard_stats(cid), None, f"stats:{cid}"),
            settle(self._characters.get_corporation(cid), None, f"corporation:{cid}"),
            settle(self._characters.get_alliance(cid), None, f"alliance:{cid}"),
            settle(self._characters.get_recent_ships(cid), [], f"ships:{cid}"),
            settle(self._fleet.estimate(cid), None, f"fleet:{cid}"),
        )

        pilot_profile = await settle(
            self._profiles.generate(stats, recent_ships), None, f"profile:{cid}"
        )

        # The browser reads recent ships from the shipType top list
        killboard_stats = (stats or KillboardStats()).with_ship_usage(recent_ships)

        return CharacterRecord(
            character_id=cid,
            name=ref.name,
            portrait=self.portrait_url(cid),
            killboard_stats=killboard_stats,
            corporation=corporation,
            alliance=alliance,
            fleet_analysis=fleet,
            pilot_profile=pilot_profile,
        )

    async def _enrich_or_skip(self, ref: CharacterRef) -> CharacterRecord | None:
        try:
            return await self.enrich_character(ref)
        except Exception:
            logger.exception("Error processing character %s", ref.name)
            return None

    async def enrich_characters(
        self, refs: list[CharacterRef]
    ) -> list[CharacterRecord]:
        """Enrich every character concurrently.

        Returns:
            Records in completion order; failed characters are omitted
        """
        records: list[CharacterRecord] = []
        tasks = [self._enrich_or_skip(ref) for ref in refs]
        for finished in asyncio.as_completed(tasks):
            record = await finished
            if record is not None:
                records.append(record)

        logger.info("Enriched %d of %d characters", len(records), len(refs))
        return records
