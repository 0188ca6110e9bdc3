"""Opencode CLI output parser (newline-delimited JSON events).

Each line is decoded independently and undecodable lines are skipped, so a
partially corrupt stream still yields whatever text it carried. ``text``
events contribute ``part.text`` in arrival order; the ``step_finish`` event
supplies the stop reason, session id and token counts.
"""
from __future__ import annotations

from ..base.models import Metadata, Response
from ..base.parsing import as_count, as_dict, as_str, iter_json_lines, lenient


@lenient
def parse(raw: str, duration: float = 0.0) -> Response:
    parts = []
    metadata = None

    for event in iter_json_lines(raw):
        etype = event.get("type")
        part = event.get("part")
        if not isinstance(part, dict):
            continue
        if etype == "text":
            parts.append(as_str(part.get("text")))
        elif etype == "step_finish":
            tokens = as_dict(part.get("tokens"))
            metadata = Metadata.from_usage(
                as_count(tokens.get("input")),
                as_count(tokens.get("output")),
                duration=duration,
                stop_reason=as_str(part.get("reason")),
                session_id=as_str(event.get("sessionID")) or as_str(part.get("sessionID")),
            )

    return Response(content="".join(parts), metadata=metadata, raw=raw)


__all__ = ["parse"]
