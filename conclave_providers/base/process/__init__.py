"""Process execution with bounded time and bounded captured output."""

from .bounded_buffer import BoundedBuffer
from .executor import ProcessExecutor

__all__ = ["BoundedBuffer", "ProcessExecutor"]
