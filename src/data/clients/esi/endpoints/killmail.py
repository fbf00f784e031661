"""Killmail-related ESI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from models.eve import EveKillmail
from utils.exceptions import ESIError

if TYPE_CHECKING:
    from data.clients import ESIClient

logger = logging.getLogger(__name__)


class KillmailEndpoints:
    """Handles all killmail-related ESI endpoints.

    Example:
        ```python
        client = ESIClient()
        killmail: EveKillmail = await client.killmails.get_killmail(
            killmail_id=123456789, killmail_hash="abcdef..."
        )
        ```
    """

    def __init__(self, client: ESIClient):
        """Initialize killmail endpoints with ESI client.

        Args:
            client: ESI client instance for HTTP operations
        """
        self._client = client

    async def get_killmail(self, killmail_id: int, killmail_hash: str) -> EveKillmail:
        """Get the full detail of a killmail.

        Args:
            killmail_id: Killmail ID
            killmail_hash: Hash published alongside the killmail (e.g. by zKillboard)

        Returns:
            Validated EveKillmail with victim and attackers

        Raises:
            ESIError: If the request fails or the payload is malformed
        """
        data = await self._client.request(
            "GET", f"/killmails/{killmail_id}/{killmail_hash}/"
        )
        try:
            killmail = EveKillmail.model_validate(data)
        except ValidationError as e:
            raise ESIError(f"Malformed killmail payload for {killmail_id}") from e

        logger.debug(
            "Retrieved killmail %d with %d attackers",
            killmail_id,
            len(killmail.attackers),
        )
        return killmail
