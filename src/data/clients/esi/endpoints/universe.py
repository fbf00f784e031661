"""Universe-related ESI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from models.eve import EveResolvedName, EveType
from utils.exceptions import ESIError

if TYPE_CHECKING:
    from data.clients import ESIClient

logger = logging.getLogger(__name__)


class UniverseEndpoints:
    """Handles all universe-related ESI endpoints.

    Example:
        ```python
        client = ESIClient()
        matches = await client.universe.resolve_character_names(["Some Pilot"])
        ship: EveType = await client.universe.get_type(587)
        ```
    """

    def __init__(self, client: ESIClient):
        """Initialize universe endpoints with ESI client.

        Args:
            client: ESI client instance for HTTP operations
        """
        self._client = client

    async def resolve_character_names(
        self, names: list[str]
    ) -> list[EveResolvedName]:
        """Resolve exact character names to IDs.

        Names without a match are absent from the result. Entries of the
        response that do not validate are skipped.

        Args:
            names: Character names to look up

        Returns:
            Matched characters in the order ESI returned them

        Raises:
            ESIError: If the request fails
        """
        data = await self._client.request("POST", "/universe/ids/", json_body=names)
        if not isinstance(data, dict):
            return []
        entries = data.get("characters") or []
        if not isinstance(entries, list):
            return []

        resolved = []
        for entry in entries:
            try:
                resolved.append(EveResolvedName.model_validate(entry))
            except ValidationError:
                logger.debug("Skipping malformed name lookup entry: %r", entry)

        logger.debug("Resolved %d of %d character names", len(resolved), len(names))
        return resolved

    async def get_type(self, type_id: int) -> EveType:
        """Get type information (used for ship names).

        Raises:
            ESIError: If the request fails or the payload is malformed
        """
        data = await self._client.request("GET", f"/universe/types/{type_id}/")
        try:
            return EveType.model_validate(data)
        except ValidationError as e:
            raise ESIError(f"Malformed type payload for {type_id}") from e
