"""HTTP API for EVE Local Scanner."""

from .app import close_services, create_app

__all__ = ["close_services", "create_app"]
