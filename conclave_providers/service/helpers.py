"""Helpers shared by the HTTP app and the CLI.

Purpose
-------
Keep presentation code thin: summarizing providers and running health probes
(cached, concurrently) lives here so both front ends behave identically.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..base.interfaces import Provider
from ..base.models import HealthStatus
from ..config.defaults import PROVIDER_HEALTH_MAX_WORKERS
from .health_cache import ProviderHealthCache


def provider_summary(provider: Provider, *, check_available: bool = True) -> Dict[str, Any]:
    """Return a JSON-friendly description of ``provider``."""
    summary: Dict[str, Any] = {
        "name": provider.name,
        "display_name": provider.display_name,
        "models": list(provider.models),
        "default_model": provider.default_model,
        "timeout_seconds": provider.timeout,
    }
    if check_available:
        summary["available"] = provider.available()
    return summary


def health_payload(provider: Provider, status: HealthStatus, *, cached: bool) -> Dict[str, Any]:
    return {"name": provider.name, "display_name": provider.display_name, "cached": cached, **status.to_dict()}


def collect_health(
    providers: Iterable[Provider],
    cache: Optional[ProviderHealthCache] = None,
    *,
    refresh: bool = False,
    max_workers: int = PROVIDER_HEALTH_MAX_WORKERS,
) -> List[Dict[str, Any]]:
    """Probe ``providers`` concurrently, serving fresh cache hits unless ``refresh``.

    Results keep the input order. New results are written back to ``cache``.
    """
    providers = list(providers)
    results: Dict[str, Tuple[HealthStatus, bool]] = {}
    pending: List[Provider] = []
    for provider in providers:
        hit = None if refresh or cache is None else cache.get_fresh(provider.name)
        if hit is not None:
            results[provider.name] = (hit, True)
        else:
            pending.append(provider)

    if pending:
        workers = max(1, min(max_workers, len(pending)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="conclave-health") as pool:
            statuses = list(pool.map(lambda p: p.health_check(), pending))
        for provider, status in zip(pending, statuses):
            results[provider.name] = (status, False)
            if cache is not None:
                cache.set(provider.name, status)

    return [health_payload(p, results[p.name][0], cached=results[p.name][1]) for p in providers]


__all__ = ["provider_summary", "health_payload", "collect_health"]
