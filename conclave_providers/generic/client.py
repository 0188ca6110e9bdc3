"""Generic adapter for any custom CLI without a dedicated parser.

Output is passed through unchanged as content; metadata carries only the
measured duration.
"""
from __future__ import annotations

from ..base.adapter import CLIProvider, duration_only_metadata
from ..base.models import Response


class GenericProvider(CLIProvider):
    PROVIDER_NAME = "generic"

    def parse_output(self, raw: str, duration: float) -> Response:
        return Response(content=raw, metadata=duration_only_metadata(duration), raw=raw)


__all__ = ["GenericProvider"]
