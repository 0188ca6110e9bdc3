"""Registry lookup failure type."""
from __future__ import annotations


class ProviderNotFoundError(LookupError):
    """Raised when a provider name is not registered.

    Attributes:
        name: The provider identifier that was requested.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"provider not found: {name}")


__all__ = ["ProviderNotFoundError"]
