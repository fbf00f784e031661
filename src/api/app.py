"""FastAPI application serving the character lookup endpoint.

``POST /api/characters`` takes ``{"characterNames": [...]}``, resolves the
names against ESI and returns one enriched record per matched character.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.schemas import (
    INVALID_INPUT,
    NO_CHARACTERS_FOUND,
    SERVER_ERROR,
    CharacterLookupRequest,
    ErrorResponse,
)
from utils.config import get_config
from utils.di_container import DIContainer, ServiceKeys, configure_container

logger = logging.getLogger(__name__)


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _parse_request(request: Request) -> CharacterLookupRequest | None:
    try:
        payload: Any = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return CharacterLookupRequest.model_validate(payload)
    except ValidationError:
        return None


async def close_services(container: DIContainer) -> None:
    """Close every service the container has created that owns a client."""
    for instance in container.instances():
        close = getattr(instance, "close", None)
        if not inspect.iscoroutinefunction(close):
            continue
        try:
            await close()
        except Exception:
            logger.exception("Error closing %s", type(instance).__name__)


def create_app(container: DIContainer | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        container: Pre-configured container; a fresh one is wired from the
            global config when omitted

    Returns:
        The application, with services closed on shutdown
    """
    if container is None:
        container = configure_container(DIContainer())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        yield
        await close_services(container)

    config = get_config()
    app = FastAPI(
        title="EVE Local Scanner API",
        description="Character lookups enriched with killboard data",
        version=config.app.version,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.post("/api/characters")
    async def lookup_characters(request: Request) -> JSONResponse:
        body = await _parse_request(request)
        if body is None:
            return _error(400, INVALID_INPUT)
        names = body.cleaned_names()
        if not names:
            return _error(400, INVALID_INPUT)

        try:
            characters = container.resolve(ServiceKeys.CHARACTER_SERVICE)
            enrichment = container.resolve(ServiceKeys.ENRICHMENT_SERVICE)

            refs = await characters.resolve_names(names)
            if not refs:
                return _error(404, NO_CHARACTERS_FOUND)

            records = await enrichment.enrich_characters(refs)
            return JSONResponse(content=[record.to_wire() for record in records])
        except Exception:
            logger.exception("Server error while looking up %d names", len(names))
            return _error(500, SERVER_ERROR)

    return app
