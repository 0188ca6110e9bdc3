"""Gemini CLI output parser.

The CLI emits one JSON object. The answer lives in a flat ``response`` field
(current CLI), inside ``candidates[0].content.parts`` (API passthrough), or in
a bare ``text`` field, in that order of preference.

Token usage may be reported twice: per-model ``stats.models.*.tokens`` blocks
and an API-style ``usageMetadata`` block. ``stats`` takes precedence (summed
across models); ``usageMetadata`` only fills fields that are still zero.
"""
from __future__ import annotations

from ..base.models import Metadata, Response
from ..base.parsing import as_count, as_dict, as_list, as_str, lenient, load_object


@lenient
def parse(raw: str, duration: float = 0.0) -> Response:
    data = load_object(raw)
    if data is None:
        return Response.plain(raw)

    candidates = as_list(data.get("candidates"))
    first = as_dict(candidates[0]) if candidates else {}
    stop_reason = as_str(first.get("finishReason"))

    content = as_str(data.get("response"))
    if not content:
        parts = as_list(as_dict(first.get("content")).get("parts"))
        content = "".join(as_str(as_dict(part).get("text")) for part in parts)
    if not content:
        content = as_str(data.get("text"))

    input_tokens = output_tokens = total_tokens = 0
    has_usage = False

    models = as_dict(as_dict(data.get("stats")).get("models"))
    for model_stats in models.values():
        tokens = as_dict(model_stats).get("tokens")
        if not isinstance(tokens, dict):
            continue
        has_usage = True
        input_tokens += as_count(tokens.get("prompt"))
        output_tokens += as_count(tokens.get("candidates"))
        total_tokens += as_count(tokens.get("total"))

    usage_md = data.get("usageMetadata")
    if isinstance(usage_md, dict):
        has_usage = True
        input_tokens = input_tokens or as_count(usage_md.get("promptTokenCount"))
        output_tokens = output_tokens or as_count(usage_md.get("candidatesTokenCount"))
        total_tokens = total_tokens or as_count(usage_md.get("totalTokenCount"))

    metadata = None
    if has_usage or stop_reason:
        metadata = Metadata.from_usage(
            input_tokens,
            output_tokens,
            total_tokens,
            duration=duration,
            stop_reason=stop_reason,
        )
    return Response(content=content, metadata=metadata, raw=raw)


__all__ = ["parse"]
