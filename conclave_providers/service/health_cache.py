"""File-backed cache of provider health results.

Purpose
-------
Health probes spawn real CLIs and can take seconds; the HTTP layer and the CLI
reuse recent successful results instead of probing on every request.

Semantics
---------
- :meth:`ProviderHealthCache.get_fresh` returns a status only when it is
  available, timestamped, and younger than the TTL. Failed probes are stored
  but never served, so an unhealthy provider is re-probed next time.
- Persistence is best effort: read/parse/write failures are logged as
  warnings and the in-memory cache keeps working.
- All operations are serialized by one mutex; no lock is held while probing.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Dict, Optional

from ..base.logging import get_logger, log_event
from ..base.models import HealthStatus
from ..config.defaults import PROVIDER_HEALTH_CACHE_FILENAME, PROVIDER_HEALTH_CACHE_TTL_SECONDS


def default_cache_path() -> Path:
    return Path(tempfile.gettempdir()) / PROVIDER_HEALTH_CACHE_FILENAME


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProviderHealthCache:
    """Mutex-guarded health status cache persisted as JSON.

    Parameters
    ----------
    path:
        Cache file; defaults to ``<tempdir>/conclave-provider-health.json``.
    ttl:
        Freshness window in seconds (non-positive values use the 30 minute default).
    now:
        Clock returning an aware UTC ``datetime`` (injectable for tests).
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        ttl: float = PROVIDER_HEALTH_CACHE_TTL_SECONDS,
        *,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = Path(path) if path is not None else default_cache_path()
        self.ttl = timedelta(seconds=ttl if ttl > 0 else PROVIDER_HEALTH_CACHE_TTL_SECONDS)
        self._now = now
        self._lock = threading.Lock()
        self._loaded = False
        self._data: Dict[str, HealthStatus] = {}
        self._logger = get_logger("conclave.health_cache")

    def get_fresh(self, name: str) -> Optional[HealthStatus]:
        with self._lock:
            self._ensure_loaded()
            status = self._data.get(name)
        if status is None or not status.available or status.checked_at is None:
            return None
        if self._now() - status.checked_at > self.ttl:
            return None
        return status

    def set(self, name: str, status: HealthStatus) -> None:
        with self._lock:
            self._ensure_loaded()
            self._data[name] = status
            self._persist()

    def snapshot(self) -> Dict[str, HealthStatus]:
        with self._lock:
            self._ensure_loaded()
            return dict(self._data)

    # ---- persistence (lock held) --------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return
        except OSError as exc:
            self._warn("health_cache.read_failed", exc)
            return
        try:
            raw = json.loads(text)
            if not isinstance(raw, dict):
                raise ValueError("cache root must be an object")
            self._data = {str(name): HealthStatus.from_dict(entry) for name, entry in raw.items()}
        except (ValueError, KeyError, TypeError) as exc:
            self._warn("health_cache.parse_failed", exc)
            self._data = {}

    def _persist(self) -> None:
        payload = {name: status.to_dict() for name, status in self._data.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            self._warn("health_cache.write_failed", exc)

    def _warn(self, event: str, exc: BaseException) -> None:
        log_event(self._logger, event, level=logging.WARNING, path=str(self.path), error=str(exc))


__all__ = ["ProviderHealthCache", "default_cache_path"]
