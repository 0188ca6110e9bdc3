"""Base shared constants for the provider execution layer.

Central location to avoid scattering magic strings and default numbers across
the executor, the parsers, and the health checker.
"""
from __future__ import annotations

# Per-stream capture ceiling (stdout and stderr are capped independently)
MAX_OUTPUT_SIZE = 10 * 1024 * 1024

# Default hard deadline for a single CLI invocation (seconds)
DEFAULT_TIMEOUT_SECONDS = 300.0

# Literal suffixes appended when a captured stream hit MAX_OUTPUT_SIZE
STDOUT_TRUNCATION_MARKER = "\n... (output truncated at 10MB)"
STDERR_TRUNCATION_MARKER = "\n... (output truncated)"

# Health probe contract
HEALTH_CHECK_PROMPT = "1+1? One digit answer only"
HEALTH_CHECK_EXPECTED = "2"
HEALTH_CHECK_TIMEOUT_SECONDS = 30.0
HEALTH_CHECK_PREVIEW_CHARS = 120

# Flag used by every wrapped CLI to select a model
MODEL_FLAG = "--model"

__all__ = [
    "MAX_OUTPUT_SIZE",
    "DEFAULT_TIMEOUT_SECONDS",
    "STDOUT_TRUNCATION_MARKER",
    "STDERR_TRUNCATION_MARKER",
    "HEALTH_CHECK_PROMPT",
    "HEALTH_CHECK_EXPECTED",
    "HEALTH_CHECK_TIMEOUT_SECONDS",
    "HEALTH_CHECK_PREVIEW_CHARS",
    "MODEL_FLAG",
]
