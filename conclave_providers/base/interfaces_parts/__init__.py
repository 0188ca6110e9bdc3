"""Interfaces (Protocols) split into single-class modules.

``conclave_providers.base.interfaces`` re-exports the stable API.
"""

from .provider import Provider
from .execute_fn import ExecuteFn, ResponseParser

__all__ = ["Provider", "ExecuteFn", "ResponseParser"]
