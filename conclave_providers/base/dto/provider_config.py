"""Configuration DTO for a single CLI-backed provider.

Purpose
-------
Carry the per-provider settings (executable, fixed arguments, models, timeout,
enablement) from the configuration layer to adapters and the factory. The
core treats instances as read-only.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation, coercion of duration strings, and
  ``model_copy``/``model_dump`` conveniences.

Failure modes & side effects
----------------------------
- Pure data container. Invalid durations or types raise
  ``pydantic.ValidationError``.
"""
from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_TIMEOUT_SECONDS

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}


def parse_duration(value: Any) -> float:
    """Parse a duration into seconds.

    Accepts numbers (seconds), numeric strings, and compound unit strings such
    as ``"5m"``, ``"30s"``, ``"1h30m"`` or ``"250ms"``. ``None``, empty and
    zero all mean "unset" and map to ``0.0``.

    Raises
    ------
    ValueError
        When the value cannot be interpreted or is negative.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError("duration must be a number or duration string")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError("duration must be non-negative")
        return float(value)
    if not isinstance(value, str):
        raise ValueError("duration must be a number or duration string")
    text = value.strip().lower()
    if not text:
        return 0.0
    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if seconds < 0:
            raise ValueError("duration must be non-negative")
        return seconds
    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(text) or pos == 0:
        raise ValueError(f"invalid duration: {value!r}")
    return total


class ProviderConfig(BaseModel):
    """Settings for one CLI provider.

    Attributes
    ----------
    command:
        Executable name or path, resolved against ``PATH`` at execute time.
    args:
        Fixed arguments inserted directly after the command on every call.
    default_model:
        Model used when a request does not name one. Empty means the CLI's own
        default (no ``--model`` value substitution happens in that case beyond
        passing the empty string through).
    models:
        Models advertised by the provider.
    timeout_seconds:
        Wall-clock limit per call. ``0`` means the default of 300 seconds.
    enabled:
        Disabled providers are skipped when building a registry.
    display_name:
        Optional human-friendly name; adapters supply their own when unset.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    command: str = ""
    args: Tuple[str, ...] = Field(default_factory=tuple)
    default_model: str = ""
    models: Tuple[str, ...] = Field(default_factory=tuple)
    timeout_seconds: float = 0.0
    enabled: bool = True
    display_name: Optional[str] = None

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> float:
        return parse_duration(value)

    @field_validator("args", "models", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split()) if value.strip() else ()
        return value

    @property
    def timeout(self) -> float:
        """Effective per-call timeout in seconds (default applied)."""
        return self.timeout_seconds if self.timeout_seconds > 0 else DEFAULT_TIMEOUT_SECONDS


__all__ = ["ProviderConfig", "parse_duration"]
