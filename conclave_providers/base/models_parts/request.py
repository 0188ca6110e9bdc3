"""
Request DTO for a single provider CLI invocation.

The request is immutable once constructed. Adapters translate it into the
provider-specific argument vector; the executor never sees it directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class Request:
    """Normalized generation request sent to provider adapters.

    Attributes:
        prompt: Input text forwarded to the CLI as its final positional argument.
        model: Model identifier. Empty string selects the provider default.
        working_dir: Directory the CLI process runs in (``None`` inherits the
            caller's working directory).
        args: Extra arguments appended after the prompt, in order. Lists are
            coerced to tuples so the request stays hashable and immutable.
    """

    prompt: str
    model: str = ""
    working_dir: Optional[str] = None
    args: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args or ()))
        if self.model is None:
            object.__setattr__(self, "model", "")

    def with_model(self, model: str) -> "Request":
        """Return a copy of this request targeting ``model``."""
        return Request(
            prompt=self.prompt,
            model=model,
            working_dir=self.working_dir,
            args=self.args,
        )

    @classmethod
    def build(
        cls,
        prompt: str,
        model: str = "",
        working_dir: Optional[str] = None,
        args: Optional[Sequence[str]] = None,
    ) -> "Request":
        """Convenience constructor accepting any sequence for ``args``."""
        return cls(prompt=prompt, model=model or "", working_dir=working_dir or None, args=tuple(args or ()))


__all__ = ["Request"]
