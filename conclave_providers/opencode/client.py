"""Opencode CLI adapter (``opencode --json``, JSONL event stream)."""
from __future__ import annotations

from ..base.adapter import CLIProvider
from . import parser as opencode_parser


class OpencodeProvider(CLIProvider):
    PROVIDER_NAME = "opencode"
    DISPLAY_NAME = "Opencode"
    FORMAT_FLAGS = ("--json",)
    parser = staticmethod(opencode_parser.parse)


__all__ = ["OpencodeProvider"]
