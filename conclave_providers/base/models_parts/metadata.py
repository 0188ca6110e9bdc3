"""
Response metadata model.

Carries token usage, timing, and provider-reported termination details. Zero
token counts mean "unknown"; adapters never report negative values.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def coerce_count(value: Any) -> int:
    """Coerce a provider-reported count into a non-negative ``int``.

    Booleans, strings, floats with fractional parts, and other junk values
    count as unknown (``0``).
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else 0
    return 0


@dataclass
class Metadata:
    """Usage statistics and termination details for a provider response.

    Attributes:
        input_tokens: Tokens consumed by the prompt (0 = unknown).
        output_tokens: Tokens produced by the model (0 = unknown).
        total_tokens: Total tokens; derived as input + output when the provider
            does not report it explicitly.
        duration: Wall-clock execution time in seconds.
        stop_reason: Provider vocabulary such as ``end_turn``, ``stop``, ``max_tokens``.
        session_id: Opaque session identifier (empty if unsupported).
    """

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    duration: float = 0.0
    stop_reason: str = ""
    session_id: str = ""

    def __post_init__(self) -> None:
        self.input_tokens = coerce_count(self.input_tokens)
        self.output_tokens = coerce_count(self.output_tokens)
        self.total_tokens = coerce_count(self.total_tokens)
        if self.duration is None or self.duration < 0:
            self.duration = 0.0
        self.stop_reason = self.stop_reason or ""
        self.session_id = self.session_id or ""

    @classmethod
    def from_usage(
        cls,
        input_tokens: Any = 0,
        output_tokens: Any = 0,
        total_tokens: Any = None,
        *,
        duration: float = 0.0,
        stop_reason: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> "Metadata":
        """Build metadata, deriving ``total_tokens`` when it was not reported."""
        meta = cls(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens if total_tokens is not None else 0,
            duration=duration,
            stop_reason=stop_reason or "",
            session_id=session_id or "",
        )
        meta.derive_total()
        return meta

    def derive_total(self) -> None:
        """Fill ``total_tokens`` from input + output when it is still unknown."""
        if self.total_tokens == 0:
            self.total_tokens = self.input_tokens + self.output_tokens

    @property
    def duration_ms(self) -> int:
        """Duration rounded to whole milliseconds."""
        return int(round(self.duration * 1000))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the metadata fields."""
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "duration_ms": self.duration_ms,
            "stop_reason": self.stop_reason,
            "session_id": self.session_id,
        }


__all__ = ["Metadata", "coerce_count"]
