"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``conclave_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.cli_error import CLIError
from .errors_parts.not_found import ProviderNotFoundError
from .errors_parts.classification import classify_exception

__all__ = ["ErrorCode", "CLIError", "ProviderNotFoundError", "classify_exception"]
