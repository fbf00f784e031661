"""Async zKillboard API client.

Two resources are used:

- ``/stats/characterID/{id}/``: aggregate statistics (danger ratio, gang
  ratio, ISK and ship totals, activity per space type)
- ``/characterID/{id}/``: the character's recent kills and losses, newest
  first, each carrying the hash needed to fetch the full killmail from ESI

Every successful call is followed by the rate limiter's fixed pause before
control returns to the caller.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from models.zkill import KillboardStats, ZKillEntry
from utils.exceptions import ZKillboardError

from .rate_limit import FixedDelayRateLimiter

logger = logging.getLogger(__name__)

# Constants
DEFAULT_BASE_URL = "https://zkillboard.com/api"
HTTP_TIMEOUT = 5.0


class ZKillboardClient:
    """Client for the public zKillboard API."""

    def __init__(
        self,
        rate_limiter: FixedDelayRateLimiter | None = None,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: float = HTTP_TIMEOUT,
        user_agent: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.rate_limiter = rate_limiter or FixedDelayRateLimiter()
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.user_agent = user_agent

        self._http_client = http_client
        self._owns_http_client = http_client is None

    def _initialize_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.request_timeout, headers=self._default_headers()
            )
        return self._http_client

    def _default_headers(self) -> dict[str, str]:
        headers = {
            "Accept-Encoding": "gzip",
            # Prevents 304 responses
            "If-None-Match": "0",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    async def _get(self, path: str) -> Any:
        """GET ``path`` and return decoded JSON, then wait out the rate limit.

        Raises:
            ZKillboardError: On transport failure, HTTP error or bad JSON
        """
        client = self._initialize_http_client()
        url = f"{self.base_url}{path}"

        logger.debug("Sending zKillboard request: GET %s", url)
        try:
            # Bounds the whole exchange, not just each socket operation
            async with asyncio.timeout(self.request_timeout):
                response = await client.get(
                    url, headers=self._default_headers(), timeout=self.request_timeout
                )
            response.raise_for_status()
            data = response.json()
        except (httpx.TimeoutException, TimeoutError) as e:
            raise ZKillboardError(f"zKillboard request timed out: {path}") from e
        except httpx.HTTPStatusError as e:
            raise ZKillboardError(
                f"zKillboard returned {e.response.status_code}: {path}"
            ) from e
        except httpx.HTTPError as e:
            raise ZKillboardError(f"zKillboard request failed: {path}: {e}") from e
        except (json.JSONDecodeError, ValueError) as e:
            raise ZKillboardError(f"zKillboard returned invalid JSON: {path}") from e

        await self.rate_limiter.wait_after_call(path)
        return data

    async def get_character_stats(self, character_id: int) -> KillboardStats | None:
        """Get aggregate killboard statistics for a character.

        Returns:
            Parsed stats, or None when zKillboard has no stats object

        Raises:
            ZKillboardError: If the request fails
        """
        data = await self._get(f"/stats/characterID/{character_id}/")
        if not isinstance(data, dict):
            logger.debug("No stats object for character %d", character_id)
            return None
        return KillboardStats.from_payload(data)

    async def get_recent_kills(
        self, character_id: int, limit: int | None = None
    ) -> list[ZKillEntry] | None:
        """Get the character's recent kills and losses, newest first.

        The list is cut to ``limit`` entries first; entries inside that window
        that do not validate are skipped, so fewer than ``limit`` may return.

        Args:
            character_id: EVE character ID
            limit: Number of newest entries to consider, or None for all

        Returns:
            Kill list entries, or None when the response is not a list

        Raises:
            ZKillboardError: If the request fails
        """
        data = await self._get(f"/characterID/{character_id}/")
        if not isinstance(data, list):
            logger.info("No kill data found for character %d", character_id)
            return None

        if limit is not None:
            data = data[:limit]

        entries = []
        for item in data:
            try:
                entries.append(ZKillEntry.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed kill list entry: %r", item)
        return entries

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
