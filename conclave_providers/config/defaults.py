"""conclave_providers.config.defaults
==================================

Central place for small, stable default values used across the package and
the lightweight service layer. Values can be overridden via the config file,
``.env`` or environment variables; these are the fallbacks.

This module avoids importing from other provider packages to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

from typing import Any, Dict

# ---- Configuration sources ----

# Default config file location; CONCLAVE_CONFIG_FILE overrides it.
DEFAULT_CONFIG_PATH = "~/.conclave/config.yaml"
CONFIG_FILE_ENV = "CONCLAVE_CONFIG_FILE"
# .env file read for PROVIDER_* overrides; CONCLAVE_DOTENV_FILE overrides it.
DEFAULT_DOTENV_PATH = ".env"
DOTENV_FILE_ENV = "CONCLAVE_DOTENV_FILE"


# ---- Built-in providers ----
# Canonical provider defaults: command, fixed args, default model, model list.
PROVIDER_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "claude": {
        "command": "claude",
        "args": ["--print"],
        "default_model": "sonnet-4.5",
        "models": ["opus-4.5", "sonnet-4.5", "haiku-4.5"],
    },
    "gemini": {
        "command": "gemini",
        "args": [],
        "default_model": "gemini-3-flash-preview",
        "models": ["gemini-3-pro-preview", "gemini-3-flash-preview"],
    },
    "qwen": {
        "command": "qwen",
        "args": [],
        "default_model": "qwen-3-coder-plus",
        "models": ["qwen-3-coder-plus"],
    },
    "codex": {
        "command": "codex",
        "args": [],
        "default_model": "gpt-5.2-codex",
        "models": ["gpt-5.2-codex", "gpt-5.2"],
    },
    "opencode": {
        "command": "opencode",
        "args": [],
        "default_model": "zai-coding-plan/glm-4.7",
        "models": ["zai-coding-plan/glm-4.7", "google/gemini-3-flash-preview"],
    },
    "mock": {
        "command": "mock",
        "args": [],
        "default_model": "mock-v1",
        "models": ["mock-v1", "mock-v2"],
        "timeout_seconds": 60,
    },
}

# Applied to every provider without an explicit timeout (seconds).
PROVIDER_DEFAULT_TIMEOUT_SECONDS = 300


# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the dev server.
PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
PROVIDER_SERVICE_DEFAULT_HOST = "127.0.0.1"
PROVIDER_SERVICE_DEFAULT_PORT = 8080

# Health cache persisted in the system temp directory.
PROVIDER_HEALTH_CACHE_FILENAME = "conclave-provider-health.json"
PROVIDER_HEALTH_CACHE_TTL_SECONDS = 30 * 60
# Worker threads used when checking several providers at once.
PROVIDER_HEALTH_MAX_WORKERS = 8


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "CONFIG_FILE_ENV",
    "DEFAULT_DOTENV_PATH",
    "DOTENV_FILE_ENV",
    "PROVIDER_DEFAULTS",
    "PROVIDER_DEFAULT_TIMEOUT_SECONDS",
    "PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS",
    "PROVIDER_SERVICE_DEFAULT_HOST",
    "PROVIDER_SERVICE_DEFAULT_PORT",
    "PROVIDER_HEALTH_CACHE_FILENAME",
    "PROVIDER_HEALTH_CACHE_TTL_SECONDS",
    "PROVIDER_HEALTH_MAX_WORKERS",
]
