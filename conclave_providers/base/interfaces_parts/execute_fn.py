"""Callable signatures shared by the health checker and the adapters."""

from __future__ import annotations

from typing import Optional, Protocol

from ..models import Request, Response


class ExecuteFn(Protocol):
    """``execute``-shaped callable accepted by :func:`check_health`."""

    def __call__(self, request: Request, *, timeout: Optional[float] = None) -> Response:
        ...


class ResponseParser(Protocol):
    """Pure ``raw -> Response`` conversion that never raises."""

    def __call__(self, raw: str, duration: float = 0.0) -> Response:
        ...


__all__ = ["ExecuteFn", "ResponseParser"]
