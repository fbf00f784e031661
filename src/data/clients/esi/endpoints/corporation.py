"""Corporation-related ESI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from models.eve import EveCorporation
from utils.exceptions import ESIError

if TYPE_CHECKING:
    from data.clients import ESIClient

logger = logging.getLogger(__name__)


class CorporationEndpoints:
    """Handles all corporation-related ESI endpoints.

    Example:
        ```python
        client = ESIClient()
        corp: EveCorporation = await client.corporations.get_corporation(corp_id)
        ```
    """

    def __init__(self, client: ESIClient):
        """Initialize corporation endpoints with ESI client.

        Args:
            client: ESI client instance for HTTP operations
        """
        self._client = client

    async def get_corporation(self, corporation_id: int) -> EveCorporation:
        """Get public corporation information.

        Raises:
            ESIError: If the request fails or the payload is malformed
        """
        data = await self._client.request("GET", f"/corporations/{corporation_id}/")
        try:
            return EveCorporation.model_validate(data)
        except ValidationError as e:
            raise ESIError(
                f"Malformed corporation payload for {corporation_id}"
            ) from e
