"""Service layer for EVE Local Scanner.

Domain-oriented submodules:
    character_service : ESI/zKillboard lookups with graceful degradation
    fleet_service     : gang composition estimate from recent killmails
    profile_service   : narrative pilot profiles from a chat model
    enrichment_service: concurrent per-character assembly
    tag_service       : rule-based descriptive tags
"""

from .character_service import CharacterService
from .enrichment_service import EnrichmentService
from .fleet_service import FleetService
from .profile_service import ProfileService, build_profile_prompt
from .tag_service import classify_tags, is_hauler_ship

__all__ = [
    "CharacterService",
    "EnrichmentService",
    "FleetService",
    "ProfileService",
    "build_profile_prompt",
    "classify_tags",
    "is_hauler_ship",
]
