"""Presentation layer: health cache, FastAPI app, and the command-line tool.

Only consumes the core (``conclave_providers.base`` and ``config``); the core
never imports from here.
"""

from .health_cache import ProviderHealthCache

__all__ = ["ProviderHealthCache"]
