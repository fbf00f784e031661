"""Alliance-related ESI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from models.eve import EveAlliance
from utils.exceptions import ESIError

if TYPE_CHECKING:
    from data.clients import ESIClient

logger = logging.getLogger(__name__)


class AllianceEndpoints:
    """Handles all alliance-related ESI endpoints."""

    def __init__(self, client: ESIClient):
        self._client = client

    async def get_alliance(self, alliance_id: int) -> EveAlliance:
        """Get public alliance information.

        Raises:
            ESIError: If the request fails or the payload is malformed
        """
        data = await self._client.request("GET", f"/alliances/{alliance_id}/")
        try:
            return EveAlliance.model_validate(data)
        except ValidationError as e:
            raise ESIError(f"Malformed alliance payload for {alliance_id}") from e
