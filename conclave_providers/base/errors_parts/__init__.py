"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from ``conclave_providers.base.errors`` for the stable surface.
"""

from .error_code import ErrorCode
from .cli_error import CLIError
from .not_found import ProviderNotFoundError
from .classification import classify_exception

__all__ = ["ErrorCode", "CLIError", "ProviderNotFoundError", "classify_exception"]
