"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used by the health checker and the presentation layers to report a stable code
for whatever an ``execute`` callable raised.
"""
from __future__ import annotations

import subprocess  # nosec B404 - exception types only

from ..cancellation import CancelledError
from .cli_error import CLIError
from .error_code import ErrorCode


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. CLIError passthrough.
        2. Timeouts (``TimeoutError``, ``subprocess.TimeoutExpired``).
        3. Caller cancellation.
        4. Missing executable (``FileNotFoundError``).
        5. Non-zero exit (``subprocess.CalledProcessError``).
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, CLIError):
        return exc.code
    if isinstance(exc, (TimeoutError, subprocess.TimeoutExpired)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, FileNotFoundError):
        return ErrorCode.NOT_FOUND
    if isinstance(exc, subprocess.CalledProcessError):
        return ErrorCode.PROCESS_FAILED
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
