"""Qwen CLI output parser.

Newer CLI releases print a JSON array of typed events (``system``,
``assistant``, ``result``); older ones print a single object with an
``output`` block. Both are handled, array first.
"""
from __future__ import annotations

from ..base.models import Metadata, Response
from ..base.parsing import as_dict, as_str, lenient, load_json, parse_event_array


def _parse_legacy(raw: str, data: dict, duration: float) -> Response:
    output = as_dict(data.get("output"))
    content = as_str(output.get("text")) or as_str(data.get("text"))
    stop_reason = as_str(output.get("finish_reason"))
    usage = data.get("usage")

    metadata = None
    if isinstance(usage, dict):
        metadata = Metadata.from_usage(
            usage.get("input_tokens"),
            usage.get("output_tokens"),
            usage.get("total_tokens"),
            duration=duration,
            stop_reason=stop_reason,
        )
    elif stop_reason:
        metadata = Metadata(duration=duration, stop_reason=stop_reason)
    return Response(content=content, metadata=metadata, raw=raw)


@lenient
def parse(raw: str, duration: float = 0.0) -> Response:
    data = load_json(raw)
    if isinstance(data, list):
        return parse_event_array(raw, data, duration)
    if isinstance(data, dict):
        return _parse_legacy(raw, data, duration)
    return Response.plain(raw)


__all__ = ["parse"]
