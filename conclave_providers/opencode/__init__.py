"""Opencode CLI provider package."""

from .client import OpencodeProvider
from .parser import parse

__all__ = ["OpencodeProvider", "parse"]
