"""Cooperative cancellation primitives.

Purpose
-------
Let a caller abort an in-flight ``execute`` call from another thread. The
process executor polls the token while waiting on the subprocess and kills the
process as soon as cancellation is requested.

Notes
-----
- ``CancellationToken`` is thread-safe; ``cancel`` may be called any number of
  times from any thread and cascades to linked child tokens.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from __future__ import annotations

import threading
from typing import List, Optional


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes caller cancellation from timeouts and process failures so it
    can be mapped to its own error code.
    """


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics."""

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[str] = None
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and cascade to children."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            already = self._event.is_set()
            reason = self._reason
        if already:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to ``timeout`` seconds; return ``True`` once cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
