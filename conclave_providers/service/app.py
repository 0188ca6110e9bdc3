"""FastAPI application exposing the provider registry over HTTP.

Endpoints
---------
- ``GET  /api/health``: liveness.
- ``GET  /api/providers``: registered providers with models and availability.
- ``GET  /api/providers/health?refresh=``: cached health for every provider.
- ``GET  /api/providers/health/{name}``: cached health for one provider.
- ``POST /api/providers/{name}/execute``: run one prompt.

``CLIError`` codes map to HTTP statuses: not found 404, timeout 504, process
failure 502, cancelled 499, anything else 500.
"""
from __future__ import annotations

import os
import threading
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request as HTTPRequest
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from ..base.errors import CLIError, ErrorCode, ProviderNotFoundError
from ..base.factory import default_registry
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Request
from ..base.registry import ProviderRegistry
from ..config.defaults import PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS
from .health_cache import ProviderHealthCache
from .helpers import collect_health, provider_summary

_STATUS_BY_CODE = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.TIMEOUT: 504,
    ErrorCode.PROCESS_FAILED: 502,
    ErrorCode.CANCELLED: 499,
}

_logger = get_logger("conclave.service")


class ExecuteBody(BaseModel):
    """Body of ``POST /api/providers/{name}/execute``.

    Extra CLI arguments are not accepted over HTTP; unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(min_length=1)
    model: str = ""
    working_dir: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class _State:
    """Lazily built registry plus the shared health cache."""

    def __init__(self, registry: Optional[ProviderRegistry], cache: Optional[ProviderHealthCache]) -> None:
        self._registry = registry
        self._lock = threading.Lock()
        self.cache = cache if cache is not None else ProviderHealthCache()

    @property
    def registry(self) -> ProviderRegistry:
        with self._lock:
            if self._registry is None:
                self._registry = default_registry()
            return self._registry


def _state(request: HTTPRequest) -> _State:
    return request.app.state.conclave


def _lookup(state: _State, name: str):
    try:
        return state.registry.get(name)
    except ProviderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def create_app(
    registry: Optional[ProviderRegistry] = None,
    health_cache: Optional[ProviderHealthCache] = None,
) -> FastAPI:
    """Build the FastAPI app.

    ``registry`` defaults to :func:`default_registry` (built on first use);
    ``health_cache`` defaults to the temp-dir cache file.
    """
    app = FastAPI(title="Conclave Provider Service", version="0.1.0")
    app.state.conclave = _State(registry, health_cache)

    cors_origins_env = os.getenv("PROVIDER_SERVICE_CORS_ORIGINS", PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS)
    allow_origins = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Service liveness; does not touch providers."""
        return {"ok": True}

    @app.get("/api/providers")
    def list_providers(request: HTTPRequest) -> Dict[str, Any]:
        state = _state(request)
        return {"ok": True, "providers": [provider_summary(p) for p in state.registry.list()]}

    @app.get("/api/providers/health")
    def providers_health(request: HTTPRequest, refresh: bool = False) -> Dict[str, Any]:
        state = _state(request)
        results = collect_health(state.registry.list(), state.cache, refresh=refresh)
        return {"ok": True, "providers": results}

    @app.get("/api/providers/health/{name}")
    def provider_health(name: str, request: HTTPRequest, refresh: bool = False) -> Dict[str, Any]:
        state = _state(request)
        provider = _lookup(state, name)
        (result,) = collect_health([provider], state.cache, refresh=refresh)
        return result

    @app.post("/api/providers/{name}/execute")
    def execute(name: str, body: ExecuteBody, request: HTTPRequest) -> Dict[str, Any]:
        state = _state(request)
        provider = _lookup(state, name)
        req = Request(prompt=body.prompt, model=body.model, working_dir=body.working_dir or None)
        try:
            resp = provider.execute(req, timeout=body.timeout_seconds)
        except CLIError as exc:
            status_code = _STATUS_BY_CODE.get(exc.code, 500)
            log_event(_logger, "service.execute_failed", LogContext(provider=name, model=body.model or None), code=exc.code.value)
            raise HTTPException(
                status_code=status_code,
                detail={"code": exc.code.value, "message": str(exc)},
            ) from exc
        return {"ok": True, "response": resp.to_dict()}

    return app


app = create_app()


__all__ = ["app", "create_app", "ExecuteBody"]
