"""Shared helpers for the provider output parsers.

Purpose
-------
Every provider family decodes loosely-typed JSON produced by a third-party
CLI. These helpers centralize tolerant decoding so family parsers stay small
and share one set of rules:

- decoding never raises; malformed input yields ``None``/empty values;
- wrong-typed fields read as empty (``""``, ``{}``, ``[]``, ``0``);
- :func:`lenient` guarantees a parser returns the plain-text fallback instead
  of propagating any unexpected exception.

The array-of-events strategy lives here as well since two families (Claude
arrays and Qwen) emit the same ``system``/``assistant``/``result`` shape.
"""
from __future__ import annotations

import functools
import json
from typing import Any, Callable, Dict, Iterator, List, Optional

from .logging import get_logger
from .models import Metadata, Response
from .models_parts.metadata import coerce_count

ParseFn = Callable[[str, float], Response]

_logger = get_logger("conclave.parsing")


def load_json(text: str) -> Any:
    """Decode ``text`` as JSON, returning ``None`` when it is not valid JSON."""
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def load_object(text: str) -> Optional[Dict[str, Any]]:
    """Decode ``text`` as a JSON object; any other JSON value yields ``None``."""
    data = load_json(text)
    return data if isinstance(data, dict) else None


def iter_json_lines(text: str) -> Iterator[Dict[str, Any]]:
    """Yield each non-blank line of ``text`` that decodes to a JSON object."""
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        event = load_object(line)
        if event is not None:
            yield event


def as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def as_count(value: Any) -> int:
    """Token count as a non-negative ``int`` (junk reads as ``0``)."""
    return coerce_count(value)


def text_blocks(content: Any) -> str:
    """Concatenate ``text`` of typed content segments whose ``type`` is ``text``.

    A bare string is returned unchanged.
    """
    if isinstance(content, str):
        return content
    parts = []
    for block in as_list(content):
        block = as_dict(block)
        if block.get("type") == "text":
            parts.append(as_str(block.get("text")))
    return "".join(parts)


def lenient(parse: ParseFn) -> ParseFn:
    """Decorate a parser so it never raises and never yields empty structure.

    Any exception, or a structured decode that produced no text, results in
    :meth:`Response.plain`.
    """

    @functools.wraps(parse)
    def wrapper(raw: str, duration: float = 0.0) -> Response:
        if not isinstance(raw, str):
            raw = "" if raw is None else str(raw)
        try:
            resp = parse(raw, duration)
        except Exception as exc:  # noqa: BLE001 - parse failure degrades to plain text
            _logger.debug("parser %s fell back to plain text: %s", parse.__module__, exc)
            return Response.plain(raw)
        if resp is None or not resp.content:
            return Response.plain(raw)
        resp.raw = raw
        return resp

    return wrapper


def parse_event_array(raw: str, events: List[Any], duration: float = 0.0) -> Optional[Response]:
    """Normalize a JSON array of typed events.

    A ``result`` event with a non-empty ``result`` string wins. Otherwise the
    text segments of every ``assistant`` event are concatenated in order.
    Usage comes from the winning result event, else from the first assistant
    event that reports one; without usage no metadata is produced.

    Returns ``None`` when the events carry no text so callers can try their
    next strategy.
    """
    result_text = ""
    result_usage: Optional[Dict[str, Any]] = None
    assistant_parts: List[str] = []
    assistant_usage: Optional[Dict[str, Any]] = None
    stop_reason = ""
    session_id = ""
    model = ""

    for event in events:
        event = as_dict(event)
        etype = event.get("type")
        session_id = session_id or as_str(event.get("session_id"))
        if etype == "result":
            text = as_str(event.get("result"))
            if text:
                result_text = text
                usage = event.get("usage")
                if isinstance(usage, dict):
                    result_usage = usage
            stop_reason = as_str(event.get("stop_reason")) or stop_reason
        elif etype == "assistant":
            message = as_dict(event.get("message"))
            assistant_parts.append(text_blocks(message.get("content")))
            model = model or as_str(message.get("model"))
            stop_reason = stop_reason or as_str(message.get("stop_reason"))
            if assistant_usage is None:
                usage = event.get("usage", message.get("usage"))
                if isinstance(usage, dict):
                    assistant_usage = usage

    content = result_text or "".join(assistant_parts)
    if not content:
        return None

    usage = result_usage if result_usage is not None else assistant_usage
    metadata = None
    if usage is not None:
        metadata = Metadata.from_usage(
            usage.get("input_tokens"),
            usage.get("output_tokens"),
            usage.get("total_tokens"),
            duration=duration,
            stop_reason=stop_reason,
            session_id=session_id,
        )
    return Response(content=content, model=model, metadata=metadata, raw=raw)


__all__ = [
    "ParseFn",
    "load_json",
    "load_object",
    "iter_json_lines",
    "as_str",
    "as_dict",
    "as_list",
    "as_count",
    "text_blocks",
    "lenient",
    "parse_event_array",
]
