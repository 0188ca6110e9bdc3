"""
Health probe outcome model.

Produced by :func:`conclave_providers.base.health.check_health` and persisted
by the service layer's health cache, hence the ``to_dict``/``from_dict`` pair.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HealthStatus:
    """Classified result of a single health probe.

    Attributes:
        available: ``True`` only when the provider answered the probe correctly.
        response_time: Probe latency in seconds, recorded regardless of outcome.
        error: Human-readable failure reason (empty when available).
        checked_at: UTC timestamp of the probe.
        error_code: Normalized error code when the probe raised, else ``None``.
    """

    available: bool
    response_time: float = 0.0
    error: str = ""
    checked_at: datetime = field(default_factory=_utcnow)
    error_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "available": self.available,
            "response_time_ms": int(round(self.response_time * 1000)),
            "error": self.error,
            "checked_at": self.checked_at.isoformat(),
            "error_code": self.error_code,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HealthStatus":
        """Rebuild a status from :meth:`to_dict` output.

        Raises ``ValueError``/``KeyError``/``TypeError`` on malformed input so
        callers can discard corrupt cache entries.
        """
        checked_at = datetime.fromisoformat(str(data["checked_at"]))
        if checked_at.tzinfo is None:
            checked_at = checked_at.replace(tzinfo=timezone.utc)
        return cls(
            available=bool(data["available"]),
            response_time=float(data.get("response_time_ms", 0)) / 1000.0,
            error=str(data.get("error") or ""),
            checked_at=checked_at,
            error_code=data.get("error_code"),
        )


__all__ = ["HealthStatus"]
