"""Provider CLI (package entrypoint).

This package wires argument parsing to action handlers kept in focused
modules. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger
from ...base.registry import ProviderRegistry
from ...config import ConfigError
from .cli_actions import build_registry, handle_config, handle_health, handle_list, handle_run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, *, registry: Optional[ProviderRegistry] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    registry: Optional[ProviderRegistry]
        Pre-built registry (tests); built from configuration when omitted.

    Returns
    -------
    int
        Process exit code (0 success, 1 provider failure, 2 usage/config error).
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level:
        configure_logger(level=args.log_level.upper())

    try:
        if args.cmd == "config":
            return handle_config(args)
        if registry is None:
            registry = build_registry(args.config_path)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    if args.cmd == "list":
        return handle_list(args, registry)
    if args.cmd == "health":
        return handle_health(args, registry)
    return handle_run(args, registry)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
