"""ESI (EVE Swagger Interface) client package."""

from .client import ESIClient

__all__ = ["ESIClient"]
