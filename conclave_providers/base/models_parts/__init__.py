"""Models parts package public surface.

Prefer importing from ``conclave_providers.base.models`` for the stable surface.
"""

from .request import Request
from .metadata import Metadata
from .response import Response
from .health_status import HealthStatus

__all__ = ["Request", "Metadata", "Response", "HealthStatus"]
