"""Claude CLI adapter (``claude --print --output-format json``)."""
from __future__ import annotations

from ..base.adapter import CLIProvider
from . import parser as claude_parser


class ClaudeProvider(CLIProvider):
    """Anthropic Claude command-line tool."""

    PROVIDER_NAME = "claude"
    DISPLAY_NAME = "Claude"
    FORMAT_FLAGS = ("--output-format", "json")
    parser = staticmethod(claude_parser.parse)


__all__ = ["ClaudeProvider"]
