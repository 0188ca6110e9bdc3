"""Codex CLI adapter.

Runs ``codex exec --json`` so the CLI executes non-interactively and streams
JSONL events on stdout.
"""
from __future__ import annotations

from ..base.adapter import CLIProvider
from . import parser as codex_parser


class CodexProvider(CLIProvider):
    PROVIDER_NAME = "codex"
    DISPLAY_NAME = "OpenAI Codex"
    FORMAT_FLAGS = ("exec", "--json")
    parser = staticmethod(codex_parser.parse)


__all__ = ["CodexProvider"]
