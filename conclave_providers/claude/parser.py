"""Claude CLI output parser.

Handles the single JSON object produced by ``claude --print --output-format
json`` (content blocks or a flat ``result`` field) and the event array emitted
by newer CLI releases. Anything else is returned as plain text.
"""
from __future__ import annotations

from ..base.models import Metadata, Response
from ..base.parsing import as_dict, as_str, lenient, load_json, parse_event_array, text_blocks


@lenient
def parse(raw: str, duration: float = 0.0) -> Response:
    """Normalize Claude CLI output into a :class:`Response`."""
    data = load_json(raw)
    if isinstance(data, list):
        return parse_event_array(raw, data, duration)
    if not isinstance(data, dict):
        return Response.plain(raw)

    content = text_blocks(data.get("content")) or as_str(data.get("result"))
    stop_reason = as_str(data.get("stop_reason"))
    session_id = as_str(data.get("session_id"))
    usage = data.get("usage")

    metadata = None
    if isinstance(usage, dict) or stop_reason or session_id:
        usage = as_dict(usage)
        # total_cost_usd and cache counters are not part of the common shape
        metadata = Metadata.from_usage(
            usage.get("input_tokens"),
            usage.get("output_tokens"),
            duration=duration,
            stop_reason=stop_reason,
            session_id=session_id,
        )
    return Response(content=content, model=as_str(data.get("model")), metadata=metadata, raw=raw)


__all__ = ["parse"]
