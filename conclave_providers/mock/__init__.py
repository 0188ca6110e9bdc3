"""Simulated provider package."""

from .client import MockProvider, load_fixture_catalog

__all__ = ["MockProvider", "load_fixture_catalog"]
