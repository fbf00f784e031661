"""Utility functions and classes for EVE Local Scanner."""

from .config import get_config, global_config, reload_config, reset_config
from .di_container import (
    DIContainer,
    DIContainerError,
    ServiceKeys,
    configure_container,
    get_container,
    reset_container,
)
from .exceptions import (
    DataProviderError,
    ESIError,
    ESIRateLimitError,
    ESIServerError,
    LocalScannerError,
    ProfileGenerationError,
    ServiceError,
    ZKillboardError,
)
from .logging_setup import setup_logging

__all__ = [
    "DIContainer",
    "DIContainerError",
    "DataProviderError",
    "ESIError",
    "ESIRateLimitError",
    "ESIServerError",
    "LocalScannerError",
    "ProfileGenerationError",
    "ServiceError",
    "ServiceKeys",
    "ZKillboardError",
    "configure_container",
    "get_config",
    "get_container",
    "global_config",
    "reload_config",
    "reset_config",
    "reset_container",
    "setup_logging",
]
