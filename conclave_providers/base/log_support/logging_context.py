"""Provider/model context merged into every structured log event.

``log_event`` flattens a :class:`LogContext` into the event payload, so the
fields here become top-level keys of each JSON log line.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class LogContext:
    """Who an event is about.

    Attributes:
        provider: Registry name of the provider (``claude``, ``my-tool``...).
        model: Model the call targeted, when known.
        extra: Additional keys; ``None`` values are dropped on output.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def with_extra(self, **fields: Any) -> "LogContext":
        """Return a copy with ``fields`` merged into ``extra``."""
        return replace(self, extra={**self.extra, **fields})

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.provider is not None:
            out["provider"] = self.provider
        if self.model is not None:
            out["model"] = self.model
        out.update((k, v) for k, v in self.extra.items() if v is not None)
        return out


__all__ = ["LogContext"]
