"""
Response DTO representing a normalized provider answer.

``raw`` always holds the exact text the parser received so callers can inspect
the original payload. It is excluded from ``to_dict`` to keep logs and HTTP
payloads small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .metadata import Metadata


@dataclass
class Response:
    """Provider-agnostic response from a CLI invocation.

    Attributes:
        content: Normalized answer text.
        model: Model that served the request (empty when unknown).
        provider: Canonical provider identifier that produced the response.
        metadata: Usage/timing details, ``None`` when the output carried none.
        raw: Unprocessed captured output, for diagnostics only.
    """

    content: str
    model: str = ""
    provider: str = ""
    metadata: Optional[Metadata] = None
    raw: str = ""

    @classmethod
    def plain(cls, raw: str) -> "Response":
        """Return the literal-content fallback for ``raw`` (no metadata)."""
        return cls(content=raw, raw=raw)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary excluding the raw payload."""
        return {
            "content": self.content,
            "model": self.model,
            "provider": self.provider,
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }


__all__ = ["Response"]
