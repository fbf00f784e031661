"""Async ESI client for the public endpoints used by the scanner."""

import asyncio
import json
import logging
from typing import Any

import httpx

from utils.exceptions import ESIError, ESIRateLimitError, ESIServerError

from .endpoints import (
    AllianceEndpoints,
    CharacterEndpoints,
    CorporationEndpoints,
    KillmailEndpoints,
    UniverseEndpoints,
)

# Configure logger for ESI client
logger = logging.getLogger(__name__)

# Constants
DEFAULT_BASE_URL = "https://esi.evetech.net/latest"
HTTP_TIMEOUT = 5.0
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR = 500


class ESIClient:
    """EVE Online ESI client for public, unauthenticated endpoints.

    The client organizes endpoints into namespaces (characters, corporations,
    etc.) and returns typed Pydantic models. Every failure surfaces as an
    ``ESIError`` subclass; no request is retried.

    Example:
        ```python
        client = ESIClient()

        refs = await client.universe.resolve_character_names(["CCP Bartender"])
        character = await client.characters.get_character(refs[0].id)
        corporation = await client.corporations.get_corporation(
            character.corporation_id
        )

        await client.close()
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: float = HTTP_TIMEOUT,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize ESI client.

        Args:
            base_url: ESI base URL including the version prefix
            request_timeout: HTTP request timeout in seconds
            user_agent: Optional User-Agent header value
            http_client: Pre-built client, mainly for tests (not closed by us)
        """
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.user_agent = user_agent

        self._http_client = http_client
        self._owns_http_client = http_client is None

        self.alliances = AllianceEndpoints(self)
        self.characters = CharacterEndpoints(self)
        self.corporations = CorporationEndpoints(self)
        self.killmails = KillmailEndpoints(self)
        self.universe = UniverseEndpoints(self)

    def _initialize_http_client(self) -> httpx.AsyncClient:
        """Create the shared HTTP client on first use."""
        if self._http_client is None:
            default_headers = {"Accept": "application/json"}
            if self.user_agent:
                default_headers["User-Agent"] = self.user_agent
            self._http_client = httpx.AsyncClient(
                timeout=self.request_timeout, headers=default_headers
            )
        return self._http_client

    async def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json_body: Any = None,
    ) -> Any:
        """Perform one ESI request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: API path (e.g., /characters/{character_id}/)
            params: Query parameters
            json_body: JSON body for POST requests

        Returns:
            Decoded JSON payload

        Raises:
            ESIRateLimitError: On HTTP 429
            ESIServerError: On HTTP 5xx
            ESIError: On any other HTTP error, transport failure or bad JSON
        """
        client = self._initialize_http_client()
        url = f"{self.base_url}{path}"

        logger.debug("Sending ESI request: %s %s", method, url)
        try:
            # Bounds the whole exchange, not just each socket operation
            async with asyncio.timeout(self.request_timeout):
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    timeout=self.request_timeout,
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            raise ESIError(f"ESI request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            raise ESIError(f"ESI request failed: {method} {path}: {e}") from e

        status = response.status_code
        if status == HTTP_STATUS_TOO_MANY_REQUESTS:
            raise ESIRateLimitError(f"ESI rate limit hit: {method} {path}")
        if status >= HTTP_STATUS_SERVER_ERROR:
            raise ESIServerError(f"ESI server error {status}: {method} {path}")
        if status >= 400:
            raise ESIError(f"ESI returned {status}: {method} {path}")

        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ESIError(f"ESI returned invalid JSON: {method} {path}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
