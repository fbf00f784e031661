"""Command line entry point for EVE Local Scanner.

Commands:
    serve               Run the HTTP API with uvicorn
    lookup NAME [...]   Look characters up in-process and print their cards
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import uvicorn

from api import close_services, create_app
from ui import render_character_card
from utils import (
    DIContainer,
    ServiceKeys,
    configure_container,
    get_config,
    setup_logging,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_arg_parser() -> argparse.ArgumentParser:
    config = get_config()
    p = argparse.ArgumentParser(
        prog=config.app.name,
        description="Look up EVE Online characters on ESI and zKillboard",
    )
    p.add_argument(
        "--version", action="version", version=f"{config.app.name} {config.app.version}"
    )
    commands = p.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=config.app.host, help="Bind address")
    serve.add_argument("--port", type=int, default=config.app.port, help="Bind port")
    serve.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, help="Override APP_LOG_LEVEL"
    )

    lookup = commands.add_parser("lookup", help="Print character cards")
    lookup.add_argument("names", nargs="+", metavar="NAME", help="Character names")
    lookup.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, help="Override APP_LOG_LEVEL"
    )
    return p


async def lookup(names: list[str], container: DIContainer) -> list[str]:
    """Run the enrichment pipeline for ``names`` and render one card each.

    Returns:
        Rendered cards, empty when no name resolved
    """
    config = container.resolve(ServiceKeys.CONFIG)
    characters = container.resolve(ServiceKeys.CHARACTER_SERVICE)
    enrichment = container.resolve(ServiceKeys.ENRICHMENT_SERVICE)
    try:
        refs = await characters.resolve_names(names)
        if not refs:
            return []
        records = await enrichment.enrich_characters(refs)
    finally:
        await close_services(container)

    return [
        render_character_card(
            record,
            zkill_site_url=config.zkill.site_url,
            image_base_url=config.esi.image_base_url,
        )
        for record in records
    ]


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)

    if args.command == "serve":
        logger.info("Starting server on %s:%d", args.host, args.port)
        uvicorn.run(create_app(), host=args.host, port=args.port, log_config=None)
        return 0

    container = configure_container(DIContainer())
    cards = asyncio.run(lookup(args.names, container))
    if not cards:
        print("No characters found")
        return 1
    print("\n\n".join(cards))
    return 0
