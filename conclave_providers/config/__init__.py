"""Unified configuration layer for CLI providers.

Goals
-----
* Centralize defaults (commands, args, models) in ``config.defaults``.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Config file (YAML or JSON) at ``CONCLAVE_CONFIG_FILE`` or
       ``~/.conclave/config.yaml``
    3. ``.env`` file values
    4. Process environment variables
    5. In-code overrides passed to :func:`load_config`
* Return one validated :class:`ProviderConfig` per provider.

Environment Variable Conventions
--------------------------------
``PROVIDER_<NAME>_ENABLED``, ``PROVIDER_<NAME>_COMMAND``,
``PROVIDER_<NAME>_MODEL``, ``PROVIDER_<NAME>_TIMEOUT`` where ``<NAME>`` is the
upper-cased provider name (``-`` becomes ``_``). ``PROVIDER_TIMEOUT`` applies
to every provider unless a per-provider value is set.

Config File Structure
---------------------
```
providers:
  claude:
    command: claude
    args: ["--print"]
    default_model: sonnet-4.5
    models: [opus-4.5, sonnet-4.5, haiku-4.5]
    timeout: 5m
    enabled: true
  my-tool:               # unknown names run through the generic adapter
    command: /opt/bin/my-tool
```

Failure Modes
-------------
Unreadable or malformed files and invalid values raise :class:`ConfigError`.
A missing default config file is not an error; a missing file that was
explicitly requested is.

Public API
----------
* load_config(path=None, *, env=None, dotenv_path=None, overrides=None) -> dict[str, ProviderConfig]
* get_provider_config(name, **kwargs) -> ProviderConfig | None
* example_config() -> str
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..base.dto import ProviderConfig
from ..base.logging import get_logger
from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DOTENV_PATH,
    DOTENV_FILE_ENV,
    PROVIDER_DEFAULTS,
    PROVIDER_DEFAULT_TIMEOUT_SECONDS,
)

_logger = get_logger("conclave.config")

_TRUE = {"1", "true", "yes", "on", "t", "y"}
_FALSE = {"0", "false", "no", "off", "f", "n"}

# File keys accepted as aliases of ProviderConfig fields
_FIELD_ALIASES = {"timeout": "timeout_seconds", "model": "default_model"}


class ConfigError(ValueError):
    """Raised when configuration cannot be read or validated.

    Attributes:
        path: Offending file, when the error came from a config file.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(f"{message} ({path})" if path else message)


def default_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    return Path(os.path.expanduser(env.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_PATH))


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Parse common boolean spellings; ``None`` when unrecognized."""
    text = str(value or "").strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return None


def load_dotenv(path: str | os.PathLike[str]) -> Dict[str, str]:
    """Read ``KEY=VALUE`` pairs from a ``.env`` file without touching ``os.environ``.

    Blank lines and ``#`` comments are skipped, `` #`` inline comments are
    stripped, and one level of matching quotes is removed. A missing file
    yields an empty mapping.
    """
    values: Dict[str, str] = {}
    p = Path(path)
    if not p.is_file():
        return values
    with p.open("r", encoding="utf-8") as fh:
        for raw_line in fh:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, val = line.split("=", 1)
            key = key.strip()
            if key.startswith("export "):
                key = key[len("export "):].strip()
            val = val.strip()
            if " #" in val:
                val = val.split(" #", 1)[0].strip()
            if len(val) >= 2 and val[0] == val[-1] and val[0] in "'\"":
                val = val[1:-1]
            if key:
                values[key] = val
    return values


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file: {exc}", str(path)) from exc
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"invalid config file: {exc}", str(path)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", str(path))
    providers = data.get("providers") or {}
    if not isinstance(providers, dict):
        raise ConfigError("'providers' must be a mapping", str(path))
    return providers


def _normalize_entry(entry: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in entry.items():
        out[_FIELD_ALIASES.get(key, key)] = value
    return out


def _env_key(name: str, suffix: str) -> str:
    return f"PROVIDER_{name.upper().replace('-', '_')}_{suffix}"


def _env_overrides(name: str, env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    enabled = env.get(_env_key(name, "ENABLED"))
    if enabled is not None:
        parsed = parse_bool(enabled)
        if parsed is None:
            _logger.warning("ignoring invalid %s=%r", _env_key(name, "ENABLED"), enabled)
        else:
            out["enabled"] = parsed
    if command := env.get(_env_key(name, "COMMAND")):
        out["command"] = command
    if model := env.get(_env_key(name, "MODEL")):
        out["default_model"] = model
    timeout = env.get(_env_key(name, "TIMEOUT")) or env.get("PROVIDER_TIMEOUT")
    if timeout:
        out["timeout_seconds"] = timeout
    return out


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: str | os.PathLike[str] | None = None,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> Dict[str, ProviderConfig]:
    """Return merged provider configuration keyed by provider name.

    Parameters
    ----------
    path:
        Config file to read. Defaults to ``CONCLAVE_CONFIG_FILE`` or
        ``~/.conclave/config.yaml``.
    env:
        Environment mapping (defaults to ``os.environ``).
    dotenv_path:
        ``.env`` file to read (defaults to ``CONCLAVE_DOTENV_FILE`` or ``.env``).
    overrides:
        Per-provider field overrides applied last.

    Raises
    ------
    ConfigError
        Malformed file content or invalid field values.
    """
    env = os.environ if env is None else env

    merged: Dict[str, Dict[str, Any]] = {
        name: {**fields, "args": list(fields["args"]), "models": list(fields["models"])}
        for name, fields in PROVIDER_DEFAULTS.items()
    }

    explicit = path is not None or bool(env.get(CONFIG_FILE_ENV))
    cfg_path = Path(os.path.expanduser(os.fspath(path))) if path is not None else default_config_path(env)
    if cfg_path.is_file():
        for name, entry in _read_config_file(cfg_path).items():
            if entry is None:
                entry = {}
            if not isinstance(entry, dict):
                raise ConfigError(f"provider '{name}' must be a mapping", str(cfg_path))
            merged.setdefault(str(name), {}).update(_normalize_entry(entry))
    elif explicit:
        raise ConfigError("config file not found", str(cfg_path))

    dotenv_file = dotenv_path if dotenv_path is not None else env.get(DOTENV_FILE_ENV, DEFAULT_DOTENV_PATH)
    layered_env: Dict[str, str] = {**load_dotenv(dotenv_file), **dict(env)}
    for name, fields in merged.items():
        fields.update(_env_overrides(name, layered_env))

    for name, fields in (overrides or {}).items():
        merged.setdefault(name, {}).update(_normalize_entry(fields))

    result: Dict[str, ProviderConfig] = {}
    for name, fields in merged.items():
        fields.setdefault("command", name)
        if not fields.get("timeout_seconds"):
            fields["timeout_seconds"] = PROVIDER_DEFAULT_TIMEOUT_SECONDS
        try:
            result[name] = ProviderConfig(**fields)
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration for provider '{name}': {exc}") from exc
    return result


def get_provider_config(name: str, **kwargs: Any) -> Optional[ProviderConfig]:
    """Return the merged configuration for one provider, or ``None``."""
    return load_config(**kwargs).get((name or "").strip().lower())


def example_config() -> str:
    """Render an example YAML config file built from the defaults."""
    providers = {}
    for name, fields in PROVIDER_DEFAULTS.items():
        providers[name] = {
            "command": fields["command"],
            "args": list(fields["args"]),
            "default_model": fields["default_model"],
            "models": list(fields["models"]),
            "timeout": f"{int(fields.get('timeout_seconds', PROVIDER_DEFAULT_TIMEOUT_SECONDS)) // 60}m",
            "enabled": True,
        }
    header = (
        "# conclave provider configuration\n"
        f"# Place this file at {DEFAULT_CONFIG_PATH} or point {CONFIG_FILE_ENV} at it.\n"
        "# Override per provider with PROVIDER_<NAME>_ENABLED/_COMMAND/_MODEL/_TIMEOUT.\n\n"
    )
    return header + yaml.safe_dump({"providers": providers}, sort_keys=False, default_flow_style=False)


__all__ = [
    "ConfigError",
    "load_config",
    "get_provider_config",
    "example_config",
    "load_dotenv",
    "parse_bool",
    "default_config_path",
]
