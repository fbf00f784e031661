"""HTTP clients for the external services the scanner consumes."""

from .esi import ESIClient
from .rate_limit import FixedDelayRateLimiter
from .zkill_client import ZKillboardClient

__all__ = [
    "ESIClient",
    "FixedDelayRateLimiter",
    "ZKillboardClient",
]
