"""Command-line entry point: ``geo-fallback --port 8080 --ttl-cache 1800``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

import uvicorn

from geofallback.core.config import Settings
from geofallback.main import create_app


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geo-fallback", description="Serve an IP-based geolocation fallback API"
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="The port number to listen on (default: PORT or 8080)",
    )
    parser.add_argument(
        "-t",
        "--ttl-cache",
        type=int,
        default=None,
        help="Cache TTL in seconds (default: TTL_CACHE or 1800)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: HOST or 127.0.0.1)",
    )
    return parser


def build_settings(argv: Sequence[str] | None = None) -> Settings:
    """Merge command-line flags over environment/.env settings."""
    args = _build_parser().parse_args(argv)
    overrides = {
        "port": args.port,
        "ttl_cache": args.ttl_cache,
        "host": args.host,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def main(argv: Sequence[str] | None = None) -> None:
    settings = build_settings(argv)
    app = create_app(settings)
    # Single worker: the cache and its refresher live in this process
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
