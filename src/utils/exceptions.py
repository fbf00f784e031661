"""Custom exception hierarchy for EVE Local Scanner.

Clients raise these; the service layer catches them and degrades to
"unavailable" values.
"""

from __future__ import annotations


class LocalScannerError(Exception):
    """Base exception for all EVE Local Scanner errors."""

    pass


class DataProviderError(LocalScannerError):
    """Base exception for upstream data provider errors."""

    pass


class ESIError(DataProviderError):
    """Base exception for ESI API errors."""

    pass


class ESIRateLimitError(ESIError):
    """Exception raised when ESI rate limit is hit (429)."""

    pass


class ESIServerError(ESIError):
    """Exception raised for ESI server errors (5xx)."""

    pass


class ZKillboardError(DataProviderError):
    """Exception raised for zKillboard API errors."""

    pass


class ServiceError(LocalScannerError):
    """Base exception for service layer errors."""

    pass


class ProfileGenerationError(ServiceError):
    """Exception raised when the pilot profile model call fails."""

    pass
