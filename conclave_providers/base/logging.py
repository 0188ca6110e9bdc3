"""Base structured logging utilities for the provider layer.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid ad-hoc logger setup inside adapters, the executor, and the service.

All loggers hang off the shared ``conclave`` logger. Its level comes from the
``CONCLAVE_LOG_LEVEL`` environment variable (default ``WARNING`` so library use
stays quiet); ``configure_logger`` adjusts level and file output at runtime.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "conclave"

_BASE_LOGGER_ATTR = "_conclave_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_conclave_console_handler"
_FILE_HANDLER_ATTR = "_conclave_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name (case-insensitive), falling back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``conclave`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv("CONCLAVE_LOG_LEVEL")
    desired_level = _parse_level(env_level, default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        # Later calls keep the configured level unless CONCLAVE_LOG_LEVEL is set
        if env_level and logger.level != desired_level:
            logger.setLevel(desired_level)
        for handler in logger.handlers:
            if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                if env_level:
                    handler.setLevel(desired_level)
                # Re-point at the current stderr (pytest capture swaps it)
                if hasattr(handler, "setStream"):
                    with contextlib.suppress(ValueError):
                        handler.setStream(sys.stderr)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return a logger under the shared ``conclave`` hierarchy.

    Child names (e.g. ``conclave.process``) propagate to the base logger so a
    single handler set controls output for the whole package.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level, numeric or by name. ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, attach (or re-point) a rotating file handler writing to
        this path. When ``None``, any handler previously attached here is removed.
    json_mode: bool
        JSON formatter (default) or plain text for handlers managed here.

    Returns
    -------
    logging.Logger
        The configured base logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for handler in managed:
            logger.removeHandler(handler)
            handler.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for handler in managed:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == abs_path:
            existing = handler
        else:
            logger.removeHandler(handler)
            handler.close()

    if existing is None:
        # 10MB x 5 backups
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON payload.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (JSON formatted by ``get_logger``).
    event: str
        Event name (e.g. ``cli.exec.start``).
    ctx: LogContext | None
        Provider/model context, merged shallowly.
    level: int
        Logging level for the record.
    keep_none: bool
        Preserve keys whose values are ``None`` (dropped by default).
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
