"""Request and error payloads for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CharacterLookupRequest(BaseModel):
    """Body of ``POST /api/characters``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    character_names: list[Any] = Field(..., alias="characterNames")

    def cleaned_names(self) -> list[str]:
        """Trimmed names; non-string and blank entries are dropped."""
        return [
            name.strip()
            for name in self.character_names
            if isinstance(name, str) and name.strip()
        ]


class ErrorResponse(BaseModel):
    error: str


INVALID_INPUT = ErrorResponse(error="Invalid input")
NO_CHARACTERS_FOUND = ErrorResponse(error="No characters found")
SERVER_ERROR = ErrorResponse(error="Server error")
