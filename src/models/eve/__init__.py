"""EVE Online data models (ESI payloads and ship usage)."""

from .character import EveCharacter, EveResolvedName
from .corporation import EveAlliance, EveCorporation
from .killmail import EveKillmail, EveKillmailAttacker, EveKillmailVictim
from .ship import FleetAnalysis, FleetMember, ShipUsageEntry
from .type import EveType

__all__ = [
    "EveAlliance",
    "EveCharacter",
    "EveCorporation",
    "EveKillmail",
    "EveKillmailAttacker",
    "EveKillmailVictim",
    "EveResolvedName",
    "EveType",
    "FleetAnalysis",
    "FleetMember",
    "ShipUsageEntry",
]
