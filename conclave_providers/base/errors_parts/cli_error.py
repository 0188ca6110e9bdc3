"""
Structured CLI provider error exception type.

Carries the provider name, a human-readable message, the normalized
:class:`ErrorCode`, and the wrapped underlying exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class CLIError(Exception):
    """Represents a failed provider CLI invocation.

    Attributes:
        provider: Provider key where the error originated (e.g., ``"claude"``).
        message: Human-readable message; captured stderr for process failures.
        code: Normalized cause: executable missing, deadline exceeded,
            non-zero exit, or caller cancellation.
        cause: Optional underlying exception (also chained as ``__cause__``
            when raised with ``raise ... from``).
    """

    provider: str
    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    cause: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.provider} provider error: {self.message}: {self.cause}"
        return f"{self.provider} provider error: {self.message}"

    @property
    def timed_out(self) -> bool:
        return self.code is ErrorCode.TIMEOUT

    @property
    def not_found(self) -> bool:
        return self.code is ErrorCode.NOT_FOUND


__all__ = ["CLIError"]
