"""Formatter and context types backing ``conclave_providers.base.logging``."""

from .json_formatter import ISO, JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "LogContext", "ISO"]
