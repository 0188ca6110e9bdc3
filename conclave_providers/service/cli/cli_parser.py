"""CLI parser construction for ``conclave-providers``.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``list``, ``run``, ``health`` and ``config`` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="conclave-providers",
        description="Inspect, probe and run AI command-line providers",
    )
    p.add_argument("--config", dest="config_path", default=None, help="Config file (YAML or JSON)")
    p.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = p.add_subparsers(dest="cmd", required=True)

    # list
    p_list = sub.add_parser("list", help="List configured providers and whether they are installed")
    p_list.add_argument("--json", action="store_true")

    # run
    p_run = sub.add_parser("run", help="Send one prompt to a provider")
    p_run.add_argument("--provider", required=True)
    p_run.add_argument("--model", default="")
    p_run.add_argument("--prompt", required=True)
    p_run.add_argument("--dir", dest="working_dir", default=None, help="Working directory for the CLI")
    p_run.add_argument("--timeout", type=_positive_float, default=None, help="Per-call timeout in seconds")
    p_run.add_argument("--json", action="store_true")

    # health
    p_health = sub.add_parser("health", help="Probe provider health (1+1 check)")
    p_health.add_argument("--provider", default=None, help="Only probe this provider")
    p_health.add_argument("--refresh", action="store_true", help="Ignore cached results")
    p_health.add_argument("--cache", dest="cache_path", default=None, help="Health cache file")
    p_health.add_argument("--json", action="store_true")

    # config
    p_config = sub.add_parser("config", help="Show the merged configuration")
    p_config.add_argument("--example", action="store_true", help="Print an example config file")

    return p


__all__ = ["build_parser"]
