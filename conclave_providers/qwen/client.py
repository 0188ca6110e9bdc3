"""Qwen Code CLI adapter (``qwen --output-format json``)."""
from __future__ import annotations

from ..base.adapter import CLIProvider
from . import parser as qwen_parser


class QwenProvider(CLIProvider):
    PROVIDER_NAME = "qwen"
    DISPLAY_NAME = "Qwen"
    FORMAT_FLAGS = ("--output-format", "json")
    parser = staticmethod(qwen_parser.parse)


__all__ = ["QwenProvider"]
