"""Dependency Injection Container for EVE Local Scanner.

Provides a lightweight dependency injection system for wiring the HTTP
clients and the enrichment services.

Usage:
    from utils.di_container import ServiceKeys, configure_container

    container = configure_container()
    enrichment = container.resolve(ServiceKeys.ENRICHMENT_SERVICE)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class DIContainerError(Exception):
    """Exception raised for DI container errors."""

    pass


class DIContainer:
    """Simple dependency injection container.

    Holds service instances and lazy factories. A factory runs once, on first
    resolution, and its result is kept for later lookups.
    """

    def __init__(self) -> None:
        self._services: dict[str, Any] = {}
        self._factories: dict[str, Callable[[DIContainer], Any]] = {}
        self._lock = threading.RLock()

    def register(self, key: str, instance: Any) -> None:
        """Register a ready-made service instance under ``key``."""
        with self._lock:
            if key in self._services:
                logger.debug("Overwriting existing service: %s", key)
            self._services[key] = instance

    def register_factory(self, key: str, factory: Callable[[DIContainer], Any]) -> None:
        """Register a factory ``(container) -> instance`` for lazy creation."""
        with self._lock:
            if key in self._factories:
                logger.debug("Overwriting existing factory: %s", key)
            self._factories[key] = factory
            # A new factory invalidates an instance built by the old one
            self._services.pop(key, None)

    def resolve(self, key: str) -> Any:
        """Resolve a service by key.

        Raises:
            DIContainerError: If service is not registered
        """
        with self._lock:
            if key in self._services:
                return self._services[key]

            if key in self._factories:
                logger.debug("Creating service from factory: %s", key)
                instance = self._factories[key](self)
                self._services[key] = instance
                return instance

            raise DIContainerError(
                f"Service '{key}' not registered. "
                f"Available: {sorted(set(self._services) | set(self._factories))}"
            )

    def is_registered(self, key: str) -> bool:
        with self._lock:
            return key in self._services or key in self._factories

    def instances(self) -> list[Any]:
        """Return the services created so far (used for shutdown)."""
        with self._lock:
            return list(self._services.values())

    def clear(self) -> None:
        """Clear all registered services and factories."""
        with self._lock:
            self._services.clear()
            self._factories.clear()


class ServiceKeys:
    """Standard service key constants for the DI container."""

    # Core infrastructure
    CONFIG = "config"
    ESI_CLIENT = "esi_client"
    ZKILL_CLIENT = "zkill_client"
    ZKILL_RATE_LIMITER = "zkill_rate_limiter"

    # Business services
    CHARACTER_SERVICE = "character_service"
    FLEET_SERVICE = "fleet_service"
    PROFILE_SERVICE = "profile_service"
    ENRICHMENT_SERVICE = "enrichment_service"


# Global singleton container
_container_instance: DIContainer | None = None
_container_lock = threading.Lock()


def get_container() -> DIContainer:
    """Get the global DI container instance."""
    global _container_instance  # noqa: PLW0603
    if _container_instance is None:
        with _container_lock:
            if _container_instance is None:
                _container_instance = DIContainer()
    assert _container_instance is not None
    return _container_instance


def reset_container() -> None:
    """Reset the global container.

    Primarily for testing.
    """
    global _container_instance  # noqa: PLW0603
    with _container_lock:
        if _container_instance is not None:
            _container_instance.clear()
        _container_instance = None


def configure_container(container: DIContainer | None = None) -> DIContainer:
    """Configure the DI container with default service factories.

    Services are only instantiated when first resolved.

    Args:
        container: Container to configure (uses global if None)

    Returns:
        Configured container
    """
    if container is None:
        container = get_container()

    from utils.config import get_config

    container.register(ServiceKeys.CONFIG, get_config())

    def esi_client_factory(c: DIContainer) -> Any:
        from data.clients import ESIClient

        config = c.resolve(ServiceKeys.CONFIG)
        return ESIClient(
            base_url=config.esi.esi_base_url,
            request_timeout=config.esi.request_timeout,
            user_agent=config.app.computed_user_agent,
        )

    container.register_factory(ServiceKeys.ESI_CLIENT, esi_client_factory)

    def rate_limiter_factory(c: DIContainer) -> Any:
        from data.clients import FixedDelayRateLimiter

        config = c.resolve(ServiceKeys.CONFIG)
        return FixedDelayRateLimiter(delay=config.zkill.request_delay)

    container.register_factory(ServiceKeys.ZKILL_RATE_LIMITER, rate_limiter_factory)

    def zkill_client_factory(c: DIContainer) -> Any:
        from data.clients import ZKillboardClient

        config = c.resolve(ServiceKeys.CONFIG)
        return ZKillboardClient(
            rate_limiter=c.resolve(ServiceKeys.ZKILL_RATE_LIMITER),
            base_url=config.zkill.base_url,
            request_timeout=config.zkill.request_timeout,
            user_agent=config.app.computed_user_agent,
        )

    container.register_factory(ServiceKeys.ZKILL_CLIENT, zkill_client_factory)

    def character_service_factory(c: DIContainer) -> Any:
        from services.character_service import CharacterService

        config = c.resolve(ServiceKeys.CONFIG)
        return CharacterService(
            esi_client=c.resolve(ServiceKeys.ESI_CLIENT),
            zkill_client=c.resolve(ServiceKeys.ZKILL_CLIENT),
            image_base_url=config.esi.image_base_url,
            recent_kill_window=config.zkill.recent_kill_window,
        )

    container.register_factory(ServiceKeys.CHARACTER_SERVICE, character_service_factory)

    def fleet_service_factory(c: DIContainer) -> Any:
        from services.fleet_service import FleetService

        config = c.resolve(ServiceKeys.CONFIG)
        return FleetService(
            character_service=c.resolve(ServiceKeys.CHARACTER_SERVICE),
            recent_kill_window=config.zkill.recent_kill_window,
        )

    container.register_factory(ServiceKeys.FLEET_SERVICE, fleet_service_factory)

    def profile_service_factory(c: DIContainer) -> Any:
        from services.profile_service import ProfileService

        config = c.resolve(ServiceKeys.CONFIG)
        return ProfileService.from_config(config.openai)

    container.register_factory(ServiceKeys.PROFILE_SERVICE, profile_service_factory)

    def enrichment_service_factory(c: DIContainer) -> Any:
        from services.enrichment_service import EnrichmentService

        config = c.resolve(ServiceKeys.CONFIG)
        return EnrichmentService(
            character_service=c.resolve(ServiceKeys.CHARACTER_SERVICE),
            fleet_service=c.resolve(ServiceKeys.FLEET_SERVICE),
            profile_service=c.resolve(ServiceKeys.PROFILE_SERVICE),
            image_base_url=config.esi.image_base_url,
        )

    container.register_factory(
        ServiceKeys.ENRICHMENT_SERVICE, enrichment_service_factory
    )

    logger.info("DI container configured with default factories")
    return container
