"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports Protocols split into single-class modules under
``conclave_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ExecuteFn, Provider, ResponseParser

__all__ = ["Provider", "ExecuteFn", "ResponseParser"]
