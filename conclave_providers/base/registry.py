"""Thread-safe provider registry.

Maps provider identifiers to adapters for the lifetime of the process.
Lookups run concurrently; registration is exclusive. No lock is held while a
provider runs, and ``available`` checks run on a snapshot outside the lock.
"""
from __future__ import annotations

from typing import Dict, List

from .errors import ProviderNotFoundError
from .interfaces import Provider
from .logging import get_logger, log_event
from .rwlock import RWLock


class ProviderRegistry:
    """Name-keyed collection of providers.

    Attributes:
        logger: Structured logger instance.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, Provider] = {}
        self._lock = RWLock()
        self.logger = get_logger("conclave.registry")

    def register(self, provider: Provider) -> None:
        """Insert ``provider``, replacing any provider with the same name."""
        name = provider.name
        with self._lock.write():
            replaced = name in self._providers
            self._providers[name] = provider
        log_event(self.logger, "registry.register", provider=name, replaced=replaced)

    def get(self, name: str) -> Provider:
        """Return the provider registered under ``name``.

        Raises:
            ProviderNotFoundError: If nothing is registered under ``name``.
        """
        with self._lock.read():
            provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def has(self, name: str) -> bool:
        with self._lock.read():
            return name in self._providers

    def names(self) -> List[str]:
        with self._lock.read():
            return sorted(self._providers)

    def list(self) -> List[Provider]:
        """All providers, sorted by name."""
        with self._lock.read():
            return [self._providers[name] for name in sorted(self._providers)]

    def available(self) -> List[Provider]:
        """Providers whose executable resolves right now (not cached)."""
        return [provider for provider in self.list() if provider.available()]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._providers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)


__all__ = ["ProviderRegistry"]
