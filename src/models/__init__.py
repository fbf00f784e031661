"""EVE Local Scanner data models (domain layer)."""

from .app import AffiliationInfo, CharacterRecord, CharacterRef, Tag, TagCategory
from .eve import (
    EveAlliance,
    EveCharacter,
    EveCorporation,
    EveKillmail,
    EveKillmailAttacker,
    EveKillmailVictim,
    EveResolvedName,
    EveType,
    FleetAnalysis,
    FleetMember,
    ShipUsageEntry,
)
from .zkill import KillboardStats, RegionActivity, TopList, ZKillEntry, ZKillMeta

__all__ = [
    "AffiliationInfo",
    "CharacterRecord",
    "CharacterRef",
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
    "KillboardStats",
    "RegionActivity",
    "ShipUsageEntry",
    "Tag",
    "TagCategory",
    "TopList",
    "ZKillEntry",
    "ZKillMeta",
]
