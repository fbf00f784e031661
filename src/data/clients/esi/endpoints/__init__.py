"""ESI endpoint classes for organized API access."""

from .alliance import AllianceEndpoints
from .character import CharacterEndpoints
from .corporation import CorporationEndpoints
from .killmail import KillmailEndpoints
from .universe import UniverseEndpoints

__all__ = [
    "AllianceEndpoints",
    "CharacterEndpoints",
    "CorporationEndpoints",
    "KillmailEndpoints",
    "UniverseEndpoints",
]
