"""Claude CLI provider package."""

from .client import ClaudeProvider
from .parser import parse

__all__ = ["ClaudeProvider", "parse"]
