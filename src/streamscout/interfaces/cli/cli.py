from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from streamscout.application.use_cases import CatalogUseCase
from streamscout.domain.exceptions import StreamScoutError
from streamscout.infrastructure.config import AppConfig, load_config
from streamscout.infrastructure.logging.setup import configure_logging
from streamscout.infrastructure.resolution import StreamResolutionChain
from streamscout.interfaces.composition import build_fetcher, build_http_client
from streamscout.interfaces.main import build_app

log = structlog.get_logger(__name__)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--base-domain",
        default=None,
        help="Override the streaming site's host (overrides STREAMSCOUT_BASE_DOMAIN).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="streamscout")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument(
        "--host",
        default=None,
        help="Bind host (overrides HOST env).",
    )
    serve.add_argument(
        "--port",
        default=None,
        type=int,
        help="Bind port (overrides PORT env).",
    )
    _add_config_flags(serve)

    search = commands.add_parser("search", help="Search the catalog once.")
    search.add_argument("query", help="Search query.")
    _add_config_flags(search)

    resolve = commands.add_parser("resolve", help="Resolve a stream URL once.")
    resolve.add_argument("url", help="Play (/iframe/) URL, or detail URL with --detail.")
    resolve.add_argument(
        "--detail",
        action="store_true",
        help="Treat URL as a title detail page and start from its play link.",
    )
    resolve.add_argument(
        "--patch-stream",
        action="store_true",
        default=None,
        help="Append h=1 to the stream URL.",
    )
    _add_config_flags(resolve)

    return parser.parse_args(list(argv) if argv is not None else None)


def _load(args: argparse.Namespace) -> AppConfig:
    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.base_domain:
        cli_overrides["base_domain"] = args.base_domain
    if getattr(args, "patch_stream", None):
        cli_overrides["patch_stream"] = True
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    return load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )


def _print_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    sys.stdout.flush()


async def _search(config: AppConfig, query: str) -> int:
    settings = config.site
    async with build_http_client(config) as http_client:
        catalog = CatalogUseCase(fetcher=build_fetcher(config, http_client))
        entries = await catalog.search(query, settings)

    _print_json(
        [
            {
                "id": entry.id,
                "name": entry.name,
                "href": entry.href(settings.base_domain),
                "image_url": entry.image_url(settings.base_domain),
            }
            for entry in entries
        ]
    )
    return 0


async def _resolve(config: AppConfig, url: str, *, detail: bool) -> int:
    settings = config.site
    async with build_http_client(config) as http_client:
        chain = StreamResolutionChain(fetcher=build_fetcher(config, http_client))
        try:
            if detail:
                stream = await chain.resolve_title(url, settings)
            else:
                stream = await chain.resolve(url, settings)
        except StreamScoutError as exc:
            log.error("resolve_failed", url=url, error=str(exc))
            return 1

    _print_json({"stream_url": stream.final_url, "headers": stream.headers})
    return 0


def start(argv: Iterable[str] | None = None) -> int:
    """Process entrypoint. Config is loaded exactly once, here."""
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    config = _load(args)
    log_config = configure_logging(config)

    if args.command == "search":
        return asyncio.run(_search(config, args.query))
    if args.command == "resolve":
        return asyncio.run(_resolve(config, args.url, detail=args.detail))

    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "7980"))
    uvicorn.run(
        build_app(config),
        host=host,
        port=port,
        log_config=log_config,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
