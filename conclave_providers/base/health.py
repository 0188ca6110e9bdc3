"""Provider health probing.

Sends a fixed arithmetic prompt through a provider's ``execute`` and checks
for the exact answer. The probe's own deadline (30 s by default) is separate
from the provider timeout; the executor enforces whichever is smaller.

Failures are reported through :class:`HealthStatus`, never raised.
"""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from .constants import HEALTH_CHECK_EXPECTED, HEALTH_CHECK_PREVIEW_CHARS, HEALTH_CHECK_PROMPT
from .errors import classify_exception
from .interfaces import ExecuteFn
from .logging import LogContext, get_logger, log_event
from .models import HealthStatus, Request
from .timeouts import get_timeout_config

_logger = get_logger("conclave.health")


def validate_reply(content: Optional[str]) -> str:
    """Return an error message for ``content``, or ``""`` when it is correct."""
    reply = (content or "").strip()
    if reply == HEALTH_CHECK_EXPECTED:
        return ""
    if not reply:
        return "unexpected response: empty"
    if len(reply) > HEALTH_CHECK_PREVIEW_CHARS:
        reply = reply[:HEALTH_CHECK_PREVIEW_CHARS] + "..."
    return f"unexpected response: {reply!r}"


def check_health(
    execute: ExecuteFn,
    model: str = "",
    *,
    timeout: Optional[float] = None,
    clock: Callable[[], float] = time.monotonic,
    provider: Optional[str] = None,
) -> HealthStatus:
    """Probe a provider through ``execute`` and classify the outcome.

    Parameters
    ----------
    execute:
        Callable with the adapter ``execute`` shape; receives the probe
        request and ``timeout=``.
    model:
        Model to probe; empty selects the provider default.
    timeout:
        Probe deadline in seconds (defaults to the configured health timeout).
    clock:
        Monotonic clock used to measure latency.
    provider:
        Optional name used only for logging.
    """
    if timeout is None:
        timeout = get_timeout_config().health_timeout_seconds
    request = Request(prompt=HEALTH_CHECK_PROMPT, model=model)
    ctx = LogContext(provider=provider, model=model or None)

    started = clock()
    try:
        resp = execute(request, timeout=timeout)
    except Exception as exc:  # noqa: BLE001 - every provider failure becomes a status
        status = HealthStatus(
            available=False,
            response_time=max(clock() - started, 0.0),
            error=str(exc),
            checked_at=datetime.now(timezone.utc),
            error_code=classify_exception(exc).value,
        )
        log_event(_logger, "health.check", ctx, available=False, error_code=status.error_code)
        return status

    elapsed = max(clock() - started, 0.0)
    error = "empty response" if resp is None else validate_reply(resp.content)
    status = HealthStatus(
        available=not error,
        response_time=elapsed,
        error=error,
        checked_at=datetime.now(timezone.utc),
    )
    log_event(_logger, "health.check", ctx, available=status.available, response_time_s=round(elapsed, 3))
    return status


__all__ = ["check_health", "validate_reply"]
