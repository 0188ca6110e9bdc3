"""conclave_providers package

Uniform execution layer for AI command-line tools (Claude, Gemini, Qwen,
Codex, Opencode, and arbitrary custom CLIs).

Purpose:
    Invoke each CLI as a bounded subprocess and normalize its idiosyncratic
    output (single JSON object, event array, JSONL stream, or plain text) into
    one :class:`Response` model.

Public API (re-exported):
    - Version: ``__version__``
    - Models: :class:`Request`, :class:`Response`, :class:`Metadata`,
      :class:`HealthStatus`, :class:`ProviderConfig`
    - Errors: :class:`CLIError`, :class:`ErrorCode`, :class:`ProviderNotFoundError`
    - Registry/factory: :class:`ProviderRegistry`, :class:`ProviderFactory`,
      :func:`registry_from_config`, :func:`default_registry`, :func:`create`
    - Health: :func:`check_health`
"""

from typing import Any, Optional

from .base import (
    CancellationToken,
    CLIError,
    CLIProvider,
    ErrorCode,
    HealthStatus,
    Metadata,
    Provider,
    ProviderConfig,
    ProviderFactory,
    ProviderNotFoundError,
    ProviderRegistry,
    Request,
    Response,
    check_health,
    default_registry,
    registry_from_config,
)

__version__ = "0.1.0"


def create(provider: str, config: Optional[ProviderConfig] = None, **kwargs: Any) -> Any:
    """Create a provider adapter by name (delegates to :meth:`ProviderFactory.create`)."""
    return ProviderFactory.create(provider, config, **kwargs)


__all__ = [
    "__version__",
    "Request",
    "Response",
    "Metadata",
    "HealthStatus",
    "ProviderConfig",
    "CLIError",
    "ErrorCode",
    "ProviderNotFoundError",
    "CancellationToken",
    "Provider",
    "CLIProvider",
    "ProviderRegistry",
    "ProviderFactory",
    "registry_from_config",
    "default_registry",
    "check_health",
    "create",
]
