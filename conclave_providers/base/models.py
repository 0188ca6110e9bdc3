"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``conclave_providers.base.models_parts`` so callers have a single stable
import path.
"""

from .models_parts.request import Request
from .models_parts.metadata import Metadata
from .models_parts.response import Response
from .models_parts.health_status import HealthStatus

__all__ = [
    "Request",
    "Metadata",
    "Response",
    "HealthStatus",
]
