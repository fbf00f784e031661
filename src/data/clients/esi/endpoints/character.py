"""Character-related ESI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from models.eve import EveCharacter
from utils.exceptions import ESIError

if TYPE_CHECKING:
    from data.clients import ESIClient

logger = logging.getLogger(__name__)


class CharacterEndpoints:
    """Handles all character-related ESI endpoints.

    Example:
        ```python
        client = ESIClient()
        character: EveCharacter = await client.characters.get_character(90000001)
        ```
    """

    def __init__(self, client: ESIClient):
        """Initialize character endpoints with ESI client.

        Args:
            client: ESI client instance for HTTP operations
        """
        self._client = client

    async def get_character(self, character_id: int) -> EveCharacter:
        """Get public information about a character.

        Args:
            character_id: Character ID

        Returns:
            Validated EveCharacter with corporation and optional alliance IDs

        Raises:
            ESIError: If the request fails or the payload is malformed
        """
        data = await self._client.request("GET", f"/characters/{character_id}/")
        try:
            character = EveCharacter.model_validate(data)
        except ValidationError as e:
            raise ESIError(f"Malformed character payload for {character_id}") from e

        logger.debug(
            "Retrieved character %d (corporation=%s alliance=%s)",
            character_id,
            character.corporation_id,
            character.alliance_id,
        )
        return character
