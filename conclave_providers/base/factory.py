"""Provider Factory utilities.

Purpose
-------
Centralize creation of CLI adapters from configuration. Family adapters are
imported lazily using ``importlib`` to keep import-time side effects out of
the factory layer; names without a dedicated adapter get the generic one.

External dependencies
---------------------
- Standard library only (``importlib``).

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. Unknown provider names are not an error:
  they fall back to :class:`~conclave_providers.generic.GenericProvider`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto import ProviderConfig
from .logging import get_logger, log_event
from .registry import ProviderRegistry

_logger = get_logger("conclave.factory")


class UnknownProviderError(Exception):
    """Raised when an adapter module or class cannot be loaded.

    Failure modes include:
    - The adapter module cannot be imported or the class is missing.
    - The adapter constructor raised during initialization.
    """


class ProviderFactory:
    """Create provider adapters from a canonical name and a ``ProviderConfig``.

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - Raises :class:`UnknownProviderError` with actionable messages for import
      failures, missing classes, and constructor errors.
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "claude": {"module": "conclave_providers.claude.client", "class": "ClaudeProvider"},
        "gemini": {"module": "conclave_providers.gemini.client", "class": "GeminiProvider"},
        "qwen": {"module": "conclave_providers.qwen.client", "class": "QwenProvider"},
        "codex": {"module": "conclave_providers.codex.client", "class": "CodexProvider"},
        "opencode": {"module": "conclave_providers.opencode.client", "class": "OpencodeProvider"},
        "mock": {"module": "conclave_providers.mock.client", "class": "MockProvider"},
    }
    _GENERIC: Dict[str, str] = {"module": "conclave_providers.generic.client", "class": "GenericProvider"}

    @classmethod
    def adapter_class(cls, provider: str) -> Type:
        """Return the adapter class for ``provider`` (generic for unknown names)."""
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name, cls._GENERIC)
        module_path, class_name = spec["module"], spec["class"]

        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

    @classmethod
    def create(cls, provider: str, config: Optional[ProviderConfig] = None, **kwargs: Any) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Provider name; also used as the registry identifier.
        config:
            Provider configuration. Defaults to ``ProviderConfig(command=provider)``.
        **kwargs:
            Extra adapter constructor kwargs (e.g. ``executor=``, ``rng=``).

        Raises
        ------
        UnknownProviderError
            If the adapter module fails to import, the class is missing, or
            the constructor raises.
        """
        name = (provider or "").strip()
        if not name:
            raise UnknownProviderError("provider name must not be empty")
        config = config or ProviderConfig(command=name)
        klass = cls.adapter_class(name)
        try:
            return klass(config, name=name, **kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical names with a dedicated adapter, in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def registry_from_config(
    providers: Mapping[str, ProviderConfig],
    registry: Optional[ProviderRegistry] = None,
) -> ProviderRegistry:
    """Register an adapter for every enabled provider in ``providers``."""
    registry = registry if registry is not None else ProviderRegistry()
    for name, config in providers.items():
        if not config.enabled:
            log_event(_logger, "factory.skip_disabled", provider=name)
            continue
        registry.register(ProviderFactory.create(name, config))
    return registry


def default_registry(**load_kwargs: Any) -> ProviderRegistry:
    """Build a registry from :func:`conclave_providers.config.load_config`."""
    # Local import keeps base free of an import-time dependency on config
    from ..config import load_config

    return registry_from_config(load_config(**load_kwargs))


__all__ = [
    "UnknownProviderError",
    "ProviderFactory",
    "registry_from_config",
    "default_registry",
]
