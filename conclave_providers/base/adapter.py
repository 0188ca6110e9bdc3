"""Shared CLI provider adapter.

Purpose
-------
Bind a provider identity to a :class:`ProcessExecutor` (composition) and a
family parser. Family adapters only declare their format flags and parser:

    class GeminiProvider(CLIProvider):
        PROVIDER_NAME = "gemini"
        FORMAT_FLAGS = ("--output-format", "json")
        parser = staticmethod(gemini_parser.parse)

Invocation shape
----------------
``command [configured args] [format flags] [--model M] prompt [extra args]``.
The executor prepends the configured args; the adapter builds the rest.

Failure modes
-------------
Executor errors (:class:`CLIError`) propagate unchanged. Parse problems never
surface as errors; parsers degrade to plain text.
"""
from __future__ import annotations

import time
from typing import ClassVar, List, Optional, Tuple

from .cancellation import CancellationToken
from .constants import MODEL_FLAG
from .dto import ProviderConfig
from .health import check_health
from .interfaces import ResponseParser
from .logging import LogContext, get_logger, log_event
from .models import HealthStatus, Metadata, Request, Response
from .process import ProcessExecutor

_logger = get_logger("conclave.adapter")


class CLIProvider:
    """Base adapter for every wrapped CLI.

    Parameters
    ----------
    config:
        Provider configuration (command, args, models, timeout).
    name:
        Registry identifier; defaults to the class ``PROVIDER_NAME``.
    display_name:
        Human-friendly name; defaults to the configured or class display name.
    executor:
        Injected executor (tests); built from ``config`` when omitted.
    """

    PROVIDER_NAME: ClassVar[str] = "generic"
    DISPLAY_NAME: ClassVar[str] = ""
    FORMAT_FLAGS: ClassVar[Tuple[str, ...]] = ()
    parser: ClassVar[Optional[ResponseParser]] = None

    def __init__(
        self,
        config: ProviderConfig,
        *,
        name: Optional[str] = None,
        display_name: Optional[str] = None,
        executor: Optional[ProcessExecutor] = None,
    ) -> None:
        self._config = config
        self._name = name or self.PROVIDER_NAME
        self._display_name = display_name or config.display_name or self.DISPLAY_NAME or self._name.capitalize()
        self._executor = executor or ProcessExecutor(
            self._name,
            config.command or self._name,
            config.args,
            config.timeout,
        )

    # ---- identity -------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def models(self) -> List[str]:
        return list(self._config.models)

    @property
    def default_model(self) -> str:
        return self._config.default_model

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def executor(self) -> ProcessExecutor:
        return self._executor

    def available(self) -> bool:
        return self._executor.available()

    # ---- execution ------------------------------------------------------
    def build_args(self, request: Request, model: str) -> List[str]:
        """Return the per-call argument vector (configured args excluded)."""
        args: List[str] = list(self.FORMAT_FLAGS)
        if model:
            args.extend([MODEL_FLAG, model])
        args.append(request.prompt)
        args.extend(request.args)
        return args

    def parse_output(self, raw: str, duration: float) -> Response:
        parser = type(self).parser
        if parser is None:
            return Response.plain(raw)
        return parser(raw, duration)

    def execute(
        self,
        request: Request,
        *,
        timeout: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Response:
        """Run ``request`` through the CLI and return a normalized response.

        Raises
        ------
        CLIError
            Executor failures (not found, timeout, cancelled, non-zero exit).
        """
        model = request.model or self.default_model
        args = self.build_args(request, model)

        started = time.monotonic()
        raw = self._executor.run(
            args,
            working_dir=request.working_dir,
            timeout=timeout,
            cancel_token=cancel_token,
        )
        duration = time.monotonic() - started

        resp = self.parse_output(raw, duration)
        resp.provider = self._name
        if model and not resp.model:
            resp.model = model
        log_event(
            _logger,
            "provider.execute",
            LogContext(provider=self._name, model=model or None),
            duration_s=round(duration, 3),
            content_len=len(resp.content),
            has_metadata=resp.metadata is not None,
        )
        return resp

    def health_check(self) -> HealthStatus:
        return check_health(self.execute, self.default_model, provider=self._name)

    # ---- legacy call shapes ----------------------------------------------
    def generate(self, prompt: str) -> str:
        return self.execute(Request(prompt=prompt)).content

    def generate_with_model(self, prompt: str, model: str) -> str:
        return self.execute(Request(prompt=prompt, model=model)).content

    def generate_with_dir(self, prompt: str, model: str, working_dir: Optional[str]) -> str:
        return self.generate_with_response(prompt, model, working_dir).content

    def generate_with_response(self, prompt: str, model: str, working_dir: Optional[str]) -> Response:
        return self.execute(Request(prompt=prompt, model=model, working_dir=working_dir or None))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"{type(self).__name__}(name={self._name!r}, command={self._executor.command!r})"


def duration_only_metadata(duration: float) -> Metadata:
    """Metadata carrying only the measured duration (unstructured CLIs)."""
    return Metadata(duration=duration)


__all__ = ["CLIProvider", "duration_only_metadata"]
