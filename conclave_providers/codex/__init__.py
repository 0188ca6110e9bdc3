"""Codex (OpenAI) CLI provider package."""

from .client import CodexProvider
from .parser import parse

__all__ = ["CodexProvider", "parse"]
