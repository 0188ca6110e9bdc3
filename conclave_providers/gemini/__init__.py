"""Gemini CLI provider package."""

from .client import GeminiProvider
from .parser import parse

__all__ = ["GeminiProvider", "parse"]
