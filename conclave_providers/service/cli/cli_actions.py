"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``conclave-providers``, keeping the entrypoint
minimal. This module has no top-level side effects and is safe to import in
tests; every handler accepts an injected registry.

Fallback & Error Semantics
--------------------------
- Provider failures are reported on stderr (JSON with ``--json``) with exit
  code 1; unknown providers exit with 2.
- Nothing is retried.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional, TextIO

import yaml

from ...base.errors import CLIError, ProviderNotFoundError
from ...base.models import Request
from ...base.registry import ProviderRegistry
from ...config import example_config, load_config
from ..health_cache import ProviderHealthCache
from ..helpers import collect_health, provider_summary


def _emit_json(payload: Any, out: TextIO) -> None:
    out.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _table(rows: list[list[str]], out: TextIO) -> None:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    for row in rows:
        out.write("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() + "\n")


def handle_list(args: argparse.Namespace, registry: ProviderRegistry, out: Optional[TextIO] = None) -> int:
    """Print every registered provider with its models and availability."""
    out = out or sys.stdout
    summaries = [provider_summary(p) for p in registry.list()]
    if args.json:
        _emit_json({"providers": summaries}, out)
        return 0
    rows = [["NAME", "DISPLAY NAME", "MODELS", "STATUS"]]
    for s in summaries:
        rows.append(
            [
                s["name"],
                s["display_name"],
                ", ".join(s["models"]) or "-",
                "available" if s["available"] else "not installed",
            ]
        )
    _table(rows, out)
    return 0


def handle_run(
    args: argparse.Namespace,
    registry: ProviderRegistry,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Execute one prompt and print the content (or the full response as JSON)."""
    out, err = out or sys.stdout, err or sys.stderr
    try:
        provider = registry.get(args.provider)
    except ProviderNotFoundError as exc:
        err.write(f"error: {exc}\n")
        return 2

    request = Request(prompt=args.prompt, model=args.model or "", working_dir=args.working_dir or None)
    try:
        resp = provider.execute(request, timeout=args.timeout)
    except CLIError as exc:
        if args.json:
            _emit_json({"ok": False, "code": exc.code.value, "error": str(exc)}, err)
        else:
            err.write(f"error: {exc}\n")
        return 1

    if args.json:
        _emit_json({"ok": True, "response": resp.to_dict()}, out)
    else:
        out.write(resp.content + "\n")
    return 0


def handle_health(
    args: argparse.Namespace,
    registry: ProviderRegistry,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Probe providers (cached) and report; exit 1 when any probe failed."""
    out, err = out or sys.stdout, err or sys.stderr
    if args.provider:
        try:
            providers = [registry.get(args.provider)]
        except ProviderNotFoundError as exc:
            err.write(f"error: {exc}\n")
            return 2
    else:
        providers = registry.list()

    cache = ProviderHealthCache(args.cache_path) if args.cache_path else ProviderHealthCache()
    results = collect_health(providers, cache, refresh=args.refresh)
    if args.json:
        _emit_json({"providers": results}, out)
    else:
        rows = [["NAME", "STATUS", "LATENCY", "DETAIL"]]
        for r in results:
            rows.append(
                [
                    r["name"],
                    "ok" if r["available"] else "unavailable",
                    f"{r['response_time_ms']}ms",
                    ("cached" if r["cached"] else r["error"]) or "",
                ]
            )
        _table(rows, out)
    return 0 if all(r["available"] for r in results) else 1


def handle_config(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    """Print the example config or the merged configuration as YAML."""
    out = out or sys.stdout
    if args.example:
        out.write(example_config())
        return 0
    merged: Dict[str, Dict[str, Any]] = {}
    for name, cfg in load_config(args.config_path).items():
        data = cfg.model_dump()
        data["args"] = list(data["args"])
        data["models"] = list(data["models"])
        merged[name] = data
    out.write(yaml.safe_dump({"providers": merged}, sort_keys=False, default_flow_style=False))
    return 0


def build_registry(config_path: Optional[str]) -> ProviderRegistry:
    from ...base.factory import registry_from_config

    return registry_from_config(load_config(config_path))


__all__ = [
    "handle_list",
    "handle_run",
    "handle_health",
    "handle_config",
    "build_registry",
]
