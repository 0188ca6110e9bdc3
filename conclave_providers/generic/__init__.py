"""Generic CLI provider package."""

from .client import GenericProvider

__all__ = ["GenericProvider"]
