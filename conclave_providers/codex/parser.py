"""Codex CLI (OpenAI family) output parser.

``codex exec --json`` streams newline-delimited events::

    {"type":"thread.started","thread_id":"..."}
    {"type":"item.completed","item":{"type":"agent_message","text":"..."}}
    {"type":"turn.completed","usage":{"input_tokens":120,"output_tokens":5}}

Older releases emitted ``message``/``text`` events with OpenAI-style usage
(``prompt_tokens``/``completion_tokens``). When no event carries text, the
payload is tried as one structured object (``response``, ``choices``,
``content``) before falling back to plain text.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import Metadata, Response
from ..base.parsing import as_count, as_dict, as_list, as_str, iter_json_lines, lenient, load_object, text_blocks


def _is_assistant_item(item: Dict[str, Any]) -> bool:
    itype = item.get("type")
    return itype == "agent_message" or (itype == "message" and item.get("role") == "assistant")


def _usage_counts(usage: Dict[str, Any]) -> tuple[int, int, int]:
    if "input_tokens" in usage or "output_tokens" in usage:
        return (
            as_count(usage.get("input_tokens")),
            as_count(usage.get("output_tokens")),
            as_count(usage.get("total_tokens")),
        )
    return (
        as_count(usage.get("prompt_tokens")),
        as_count(usage.get("completion_tokens")),
        as_count(usage.get("total_tokens")),
    )


def _parse_events(raw: str, duration: float) -> Optional[Response]:
    agent_messages: List[str] = []
    legacy_parts: List[str] = []
    usage: Optional[Dict[str, Any]] = None
    reported_ms = 0
    stop_reason = ""
    session_id = ""

    for event in iter_json_lines(raw):
        etype = event.get("type")
        if etype == "thread.started":
            session_id = as_str(event.get("thread_id")) or session_id
        session_id = as_str(event.get("session_id")) or session_id

        if etype == "item.completed":
            item = as_dict(event.get("item"))
            if _is_assistant_item(item):
                text = as_str(item.get("text")) or text_blocks(item.get("content"))
                if text:
                    agent_messages.append(text)

        message = event.get("message")
        if isinstance(message, dict):
            legacy_parts.append(as_str(message.get("content")))
        legacy_parts.append(as_str(event.get("text")))

        if isinstance(event.get("usage"), dict):
            usage = event["usage"]
            reported_ms = as_count(usage.get("duration_ms")) or reported_ms
        stop_reason = as_str(event.get("stop_reason")) or stop_reason

    content = "\n\n".join(agent_messages) + "".join(legacy_parts)
    if not content:
        return None

    metadata = None
    if usage is not None or stop_reason or session_id:
        input_tokens, output_tokens, total_tokens = _usage_counts(usage or {})
        metadata = Metadata.from_usage(
            input_tokens,
            output_tokens,
            total_tokens,
            duration=reported_ms / 1000.0 if reported_ms else duration,
            stop_reason=stop_reason,
            session_id=session_id,
        )
    return Response(content=content, metadata=metadata, raw=raw)


def _parse_structured(raw: str, duration: float) -> Response:
    data = load_object(raw)
    if data is None:
        return Response.plain(raw)

    stop_reason = ""
    content = as_str(data.get("response"))
    choices = as_list(data.get("choices"))
    if not content and choices:
        first = as_dict(choices[0])
        content = as_str(as_dict(first.get("message")).get("content"))
        stop_reason = as_str(first.get("finish_reason"))
    if not content:
        content = as_str(data.get("content"))

    metadata = None
    usage = data.get("usage")
    if isinstance(usage, dict) or stop_reason:
        input_tokens, output_tokens, total_tokens = _usage_counts(as_dict(usage))
        metadata = Metadata.from_usage(
            input_tokens,
            output_tokens,
            total_tokens,
            duration=duration,
            stop_reason=stop_reason,
        )
    return Response(content=content, metadata=metadata, raw=raw)


@lenient
def parse(raw: str, duration: float = 0.0) -> Response:
    """Normalize Codex CLI output (event stream first, then single object)."""
    resp = _parse_events(raw, duration)
    if resp is not None:
        return resp
    return _parse_structured(raw, duration)


__all__ = ["parse"]
