"""Qwen CLI provider package."""

from .client import QwenProvider
from .parser import parse

__all__ = ["QwenProvider", "parse"]
