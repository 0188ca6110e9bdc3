"""Gemini CLI adapter (``gemini --output-format json``)."""
from __future__ import annotations

from ..base.adapter import CLIProvider
from . import parser as gemini_parser


class GeminiProvider(CLIProvider):
    PROVIDER_NAME = "gemini"
    DISPLAY_NAME = "Google Gemini"
    FORMAT_FLAGS = ("--output-format", "json")
    parser = staticmethod(gemini_parser.parse)


__all__ = ["GeminiProvider"]
