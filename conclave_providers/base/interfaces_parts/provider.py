"""Provider Protocol (single-class module).

Defines the execution contract every CLI adapter implements.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..models import HealthStatus, Request, Response


@runtime_checkable
class Provider(Protocol):
    """Uniform contract for wrapped AI command-line tools.

    Every member is mandatory; callers never probe for optional capabilities.
    """

    @property
    def name(self) -> str:
        """Canonical provider identifier, e.g. ``"claude"``."""
        ...

    @property
    def display_name(self) -> str:
        ...

    @property
    def models(self) -> Sequence[str]:
        ...

    @property
    def default_model(self) -> str:
        ...

    @property
    def timeout(self) -> float:
        """Configured per-call deadline in seconds."""
        ...

    def available(self) -> bool:
        """Whether the executable currently resolves on ``PATH``."""
        ...

    def execute(
        self,
        request: Request,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Response:
        """Run ``request`` and return the normalized response.

        Raises ``CLIError`` for executor failures. Output that cannot be
        decoded is never an error; it comes back as plain-text content.
        """
        ...

    def health_check(self) -> HealthStatus:
        """Send the health probe and classify the reply. Never raises."""
        ...


__all__ = ["Provider"]
