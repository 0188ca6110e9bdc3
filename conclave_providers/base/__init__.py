"""
Providers Base Package

Exports the provider-agnostic execution contracts for the CLI providers layer:

- Models: request/response/metadata/health DTOs
- Errors: ``CLIError`` taxonomy and classification
- Process: bounded, deadline-enforced subprocess execution
- Adapter: shared ``CLIProvider`` composed with a ``ProcessExecutor``
- Registry and Factory: name-keyed adapters built from configuration
- Health: the arithmetic probe
"""

from .adapter import CLIProvider
from .cancellation import CancellationToken, CancelledError
from .dto import ProviderConfig, parse_duration
from .errors import CLIError, ErrorCode, ProviderNotFoundError, classify_exception
from .factory import ProviderFactory, UnknownProviderError, default_registry, registry_from_config
from .health import check_health
from .interfaces import ExecuteFn, Provider, ResponseParser
from .models import HealthStatus, Metadata, Request, Response
from .process import BoundedBuffer, ProcessExecutor
from .registry import ProviderRegistry
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Request",
    "Response",
    "Metadata",
    "HealthStatus",
    "ProviderConfig",
    "parse_duration",
    # Errors
    "CLIError",
    "ErrorCode",
    "ProviderNotFoundError",
    "classify_exception",
    "CancellationToken",
    "CancelledError",
    # Interfaces
    "Provider",
    "ExecuteFn",
    "ResponseParser",
    # Execution
    "BoundedBuffer",
    "ProcessExecutor",
    "CLIProvider",
    "TimeoutConfig",
    "get_timeout_config",
    # Registry / factory / health
    "ProviderRegistry",
    "ProviderFactory",
    "UnknownProviderError",
    "registry_from_config",
    "default_registry",
    "check_health",
]
