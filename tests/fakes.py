"""Hand-written fakes for the ESI and zKillboard clients."""

from __future__ import annotations

from collections import Counter
from types import SimpleNamespace

from models.eve import (
    EveAlliance,
    EveCharacter,
    EveCorporation,
    EveKillmail,
    EveResolvedName,
    EveType,
)
from models.zkill import KillboardStats, ZKillEntry
from utils.exceptions import ESIError, ZKillboardError


def kill_entry(killmail_id: int) -> ZKillEntry:
    return ZKillEntry.model_validate(
        {"killmail_id": killmail_id, "zkb": {"hash": f"hash{killmail_id}"}}
    )


def killmail(
    killmail_id: int,
    victim: tuple[int | None, int | None],
    attackers: list[tuple[int | None, int | None]],
) -> EveKillmail:
    """Build a killmail from ``(character_id, ship_type_id)`` pairs."""
    return EveKillmail.model_validate(
        {
            "killmail_id": killmail_id,
            "victim": {"character_id": victim[0], "ship_type_id": victim[1]},
            "attackers": [
                {"character_id": cid, "ship_type_id": sid} for cid, sid in attackers
            ],
        }
    )


class FakeESI:
    """In-memory ESI with per-endpoint call counters.

    Any lookup without data raises ``ESIError`` like a 404 would.
    """

    def __init__(self):
        self.names: dict[str, int] = {}
        self.characters_data: dict[int, dict] = {}
        self.corporations_data: dict[int, dict] = {}
        self.alliances_data: dict[int, dict] = {}
        self.killmails_data: dict[int, EveKillmail] = {}
        self.types: dict[int, str] = {}
        self.calls: Counter = Counter()
        self.fail_names = False
        self.closed = False

        self.universe = SimpleNamespace(
            resolve_character_names=self._resolve_names, get_type=self._get_type
        )
        self.characters = SimpleNamespace(get_character=self._get_character)
        self.corporations = SimpleNamespace(get_corporation=self._get_corporation)
        self.alliances = SimpleNamespace(get_alliance=self._get_alliance)
        self.killmails = SimpleNamespace(get_killmail=self._get_killmail)

    async def _resolve_names(self, names):
        self.calls["names"] += 1
        if self.fail_names:
            raise ESIError("name lookup failed")
        return [
            EveResolvedName(id=self.names[name], name=name)
            for name in names
            if name in self.names
        ]

    async def _get_character(self, character_id):
        self.calls["character"] += 1
        if character_id not in self.characters_data:
            raise ESIError(f"character {character_id} not found")
        return EveCharacter.model_validate(self.characters_data[character_id])

    async def _get_corporation(self, corporation_id):
        self.calls["corporation"] += 1
        if corporation_id not in self.corporations_data:
            raise ESIError(f"corporation {corporation_id} not found")
        return EveCorporation.model_validate(self.corporations_data[corporation_id])

    async def _get_alliance(self, alliance_id):
        self.calls["alliance"] += 1
        if alliance_id not in self.alliances_data:
            raise ESIError(f"alliance {alliance_id} not found")
        return EveAlliance.model_validate(self.alliances_data[alliance_id])

    async def _get_killmail(self, killmail_id, killmail_hash):
        self.calls["killmail"] += 1
        if killmail_id not in self.killmails_data:
            raise ESIError(f"killmail {killmail_id} not found")
        assert killmail_hash == f"hash{killmail_id}"
        return self.killmails_data[killmail_id]

    async def _get_type(self, type_id):
        self.calls[f"type:{type_id}"] += 1
        if type_id not in self.types:
            raise ESIError(f"type {type_id} not found")
        return EveType(type_id=type_id, name=self.types[type_id])

    async def close(self):
        self.closed = True


class FakeZKill:
    """In-memory zKillboard; a missing character behaves like a failed call."""

    def __init__(self):
        self.stats: dict[int, dict | None] = {}
        self.kills: dict[int, list[ZKillEntry] | None] = {}
        self.calls: Counter = Counter()
        self.limits: list[int | None] = []
        self.closed = False

    async def get_character_stats(self, character_id):
        self.calls["stats"] += 1
        if character_id not in self.stats:
            raise ZKillboardError("stats unavailable")
        payload = self.stats[character_id]
        return None if payload is None else KillboardStats.from_payload(payload)

    async def get_recent_kills(self, character_id, limit=None):
        self.calls["kills"] += 1
        self.limits.append(limit)
        if character_id not in self.kills:
            raise ZKillboardError("kill list unavailable")
        entries = self.kills[character_id]
        if entries is None or limit is None:
            return entries
        return entries[:limit]

    async def close(self):
        self.closed = True
