"""Simulated provider backed by JSON fixtures for offline use and tests.

Purpose
-------
Implement the full ``Provider`` contract without spawning any process, so the
registry, health checks, HTTP service and CLI can be exercised anywhere.

External dependencies
---------------------
Standard library only. Fixtures are loaded via ``importlib.resources``.

Determinism
-----------
Template choice uses an explicitly constructed ``random.Random`` (never the
module-level generator) and the simulated latency goes through an injectable
``sleep``, so tests can seed the RNG and skip the delay.
"""

from __future__ import annotations

import json
import random
import time
from importlib import resources
from typing import Any, Callable, Dict, Mapping, Optional

from ..base.adapter import CLIProvider
from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import ProviderConfig
from ..base.errors import CLIError, ErrorCode
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Metadata, Request, Response

_FIXTURE_RESOURCE = "responses.json"
_PROMPT_PREVIEW_CHARS = 50


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the mock provider.

    Parameters
    ----------
    resource: str, default ``responses.json``
        Name of the resource file under ``conclave_providers.mock.fixtures``.
    """
    package = "conclave_providers.mock.fixtures"
    data = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockProvider(CLIProvider):
    """Adapter returning canned responses instead of running a CLI."""

    PROVIDER_NAME = "mock"
    DISPLAY_NAME = "Mock (Simulated)"

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        name: Optional[str] = None,
        display_name: Optional[str] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        catalog: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize the mock provider.

        Parameters
        ----------
        config:
            Optional configuration; models default to ``mock-v1``/``mock-v2``.
        rng:
            Random source for template selection. A fresh ``random.Random()``
            is created when omitted.
        sleep:
            Function used to simulate latency (pass ``lambda _: None`` in tests).
        catalog:
            Pre-parsed fixture catalog, mainly for tests.
        """
        self._catalog: Mapping[str, Any] = catalog if catalog is not None else load_fixture_catalog()
        config = config or ProviderConfig()
        default_model = config.default_model or str(self._catalog.get("default_model", "mock-v1"))
        config = config.model_copy(
            update={
                "command": config.command or "mock",
                "default_model": default_model,
                "models": config.models or ("mock-v1", "mock-v2"),
            }
        )
        super().__init__(config, name=name, display_name=display_name)
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep
        self._delay = float(self._catalog.get("delay_seconds", 0.5))
        self._responses: Mapping[str, Any] = self._catalog.get("responses", {})
        self._templates = list(self._catalog.get("templates") or ["Mock response to: {prompt}... [Simulated content]"])
        self._logger = get_logger(f"conclave.mock.{self.name}")

    def available(self) -> bool:
        return True

    def execute(
        self,
        request: Request,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Response:
        model = request.model or self.default_model
        ctx = LogContext(provider=self.name, model=model)
        log_event(self._logger, "mock.execute", ctx, prompt_len=len(request.prompt), working_dir=request.working_dir)

        deadline = self.timeout if timeout is None or timeout <= 0 else min(self.timeout, timeout)
        self._simulate_latency(min(self._delay, deadline), cancel_token)
        if self._delay > deadline:
            raise CLIError(self.name, "command timed out", ErrorCode.TIMEOUT, TimeoutError(f"exceeded {deadline}s"))

        content, stop_reason = self._answer(request.prompt, model)
        input_tokens = len(request.prompt) // 4
        output_tokens = len(content) // 4
        metadata = Metadata(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=input_tokens + output_tokens,
            duration=self._delay,
            stop_reason=stop_reason,
        )
        return Response(content=content, model=model, provider=self.name, metadata=metadata, raw=content)

    def _simulate_latency(self, seconds: float, cancel_token: Optional[CancellationToken]) -> None:
        if cancel_token is None:
            self._sleep(seconds)
            return
        if cancel_token.cancelled or cancel_token.wait(seconds):
            cause = CancelledError(cancel_token.reason or "operation cancelled")
            raise CLIError(self.name, "command cancelled", ErrorCode.CANCELLED, cause) from cause

    def _answer(self, prompt: str, model: str) -> tuple[str, str]:
        entry = self._responses.get(prompt.strip())
        if isinstance(entry, Mapping):
            return str(entry.get("text", "")), str(entry.get("stop_reason", "end_turn"))
        template = self._rng.choice(self._templates)
        return template.format(prompt=prompt[:_PROMPT_PREVIEW_CHARS], model=model), "end_turn"


__all__ = ["MockProvider", "load_fixture_catalog"]
