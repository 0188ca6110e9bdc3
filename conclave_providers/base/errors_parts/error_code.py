"""
Normalized CLI error codes (taxonomy).

Values are lowercase snake_case and are a stable public contract for logging,
health reporting, and the HTTP layer.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated failure categories for a provider invocation."""

    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    PROCESS_FAILED = "process_failed"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
