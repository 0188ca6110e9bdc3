"""Timeout configuration for provider CLI invocations.

This module centralizes the timeout values used by adapters and the health
checker so no ad-hoc deadlines are scattered through the code base.

Key Components
--------------
TimeoutConfig
    Frozen dataclass with the normalized timeouts (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when the relevant variables change. Supported
    environment variables (all optional):
        CONCLAVE_TIMEOUT_EXECUTE_SECONDS
        CONCLAVE_TIMEOUT_HEALTH_SECONDS

effective_timeout(configured, requested)
    The executor's rule for combining the provider timeout with a
    caller-supplied deadline: the smaller positive value wins.

Failure Modes
-------------
Invalid or non-positive environment values are ignored in favor of defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_TIMEOUT_SECONDS, HEALTH_CHECK_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        execute_timeout_seconds: Default wall-clock limit for one provider
            invocation when the provider configuration does not set one.
        health_timeout_seconds: Deadline for a single health probe. Distinct
            from (and usually shorter than) the execute timeout.
    """

    execute_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    health_timeout_seconds: float = HEALTH_CHECK_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached ``TimeoutConfig`` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    cur_guard = "/".join(
        [
            os.getenv("CONCLAVE_TIMEOUT_EXECUTE_SECONDS", ""),
            os.getenv("CONCLAVE_TIMEOUT_HEALTH_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        execute_timeout_seconds=_parse_env_float("CONCLAVE_TIMEOUT_EXECUTE_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        health_timeout_seconds=_parse_env_float("CONCLAVE_TIMEOUT_HEALTH_SECONDS", HEALTH_CHECK_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def effective_timeout(configured: Optional[float], requested: Optional[float] = None) -> float:
    """Combine a configured timeout with an optional caller deadline.

    Non-positive or missing ``configured`` values fall back to the execute
    default from :func:`get_timeout_config`. A positive ``requested`` value
    caps the result.
    """
    base = configured if configured and configured > 0 else get_timeout_config().execute_timeout_seconds
    if requested is not None and requested > 0:
        return min(base, requested)
    return base


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "effective_timeout",
]
