"""Fleet composition estimate from recent killmails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from models.eve import FleetAnalysis, FleetMember

if TYPE_CHECKING:
    from services.character_service import CharacterService

logger = logging.getLogger(__name__)


class FleetService:
    """Guesses who a character flies with from the attackers on its kills.

    Losses are skipped. On every other recent killmail each attacker with
    both a character and a ship type counts once towards that ship type.
    """

    def __init__(
        self, character_service: CharacterService, recent_kill_window: int = 5
    ):
        self._characters = character_service
        self.recent_kill_window = recent_kill_window

    async def estimate(self, character_id: int) -> FleetAnalysis | None:
        """Tally attacker ship types over the character's recent killmails.

        Returns:
            Ship types sorted by descending count (ties keep first-seen
            order), or None when the kill list itself is unavailable
        """
        entries = await self._characters.get_recent_kill_entries(character_id)
        if entries is None:
            return None

        tally: dict[int, FleetMember] = {}
        for entry in entries[: self.recent_kill_window]:
            killmail = await self._characters.get_killmail(entry)
            if killmail is None:
                continue
            if killmail.victim.character_id == character_id:
                continue

            for attacker in killmail.attackers:
                if attacker.character_id is None or attacker.ship_type_id is None:
                    continue
                member = tally.get(attacker.ship_type_id)
                if member is None:
                    tally[attacker.ship_type_id] = FleetMember(
                        ship_type_id=attacker.ship_type_id,
                        ship_name=await self._characters.get_ship_name(
                            attacker.ship_type_id
                        ),
                        count=1,
                    )
                else:
                    member.count += 1

        members = sorted(tally.values(), key=lambda m: m.count, reverse=True)
        logger.debug(
            "Fleet estimate for %d: %d ship types from %d killmails",
            character_id,
            len(members),
            len(entries),
        )
        return FleetAnalysis(fleet_members=members)
