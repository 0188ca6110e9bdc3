"""Development server for the provider HTTP app.

Flags override environment variables, which override the defaults in
``config.defaults``:

- ``--host`` / ``PROVIDER_SERVICE_HOST`` (default ``127.0.0.1``)
- ``--port`` / ``PROVIDER_SERVICE_PORT`` (default ``8080``)
- ``--reload`` / ``PROVIDER_SERVICE_RELOAD=true`` (default off)
"""
from __future__ import annotations

import argparse
import os
from typing import Optional

import uvicorn

from ..base.logging import get_logger, log_event
from ..config import parse_bool
from ..config.defaults import PROVIDER_SERVICE_DEFAULT_HOST, PROVIDER_SERVICE_DEFAULT_PORT

_logger = get_logger("conclave.service.dev_server")


def _parse_port(value: str | None, default: int) -> int:
    """Parse a TCP port, falling back to ``default`` for junk or out-of-range values."""
    try:
        port = int(value) if value else default
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="conclave-providers-serve", description="Run the provider HTTP service")
    p.add_argument("--host", default=os.getenv("PROVIDER_SERVICE_HOST", PROVIDER_SERVICE_DEFAULT_HOST))
    p.add_argument(
        "--port",
        type=int,
        default=_parse_port(os.getenv("PROVIDER_SERVICE_PORT"), PROVIDER_SERVICE_DEFAULT_PORT),
    )
    p.add_argument(
        "--reload",
        action="store_true",
        default=bool(parse_bool(os.getenv("PROVIDER_SERVICE_RELOAD"))),
    )
    return p


def main(argv: Optional[list[str]] = None) -> None:
    """Start uvicorn serving ``conclave_providers.service.app:app``."""
    args = build_parser().parse_args(argv)
    log_event(_logger, "service.start", host=args.host, port=args.port, reload=args.reload)
    uvicorn.run(
        "conclave_providers.service.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
