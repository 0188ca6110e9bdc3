"""Size-capped byte sink for subprocess output capture."""
from __future__ import annotations

import codecs
import threading


class BoundedBuffer:
    """Accumulate bytes up to ``limit``; silently discard the rest.

    ``write`` always reports the full chunk as consumed so the producing pipe
    keeps draining after the cap is reached. ``truncated`` flips to ``True``
    the first time any byte is dropped.
    """

    def __init__(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self._limit = limit
        self._chunks: list[bytes] = []
        self._size = 0
        self._truncated = False
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def truncated(self) -> bool:
        return self._truncated

    def __len__(self) -> int:
        return self._size

    def write(self, data: bytes) -> int:
        with self._lock:
            remaining = self._limit - self._size
            if remaining <= 0:
                if data:
                    self._truncated = True
                return len(data)
            if len(data) > remaining:
                self._chunks.append(bytes(data[:remaining]))
                self._size += remaining
                self._truncated = True
            else:
                self._chunks.append(bytes(data))
                self._size += len(data)
            return len(data)

    def getvalue(self) -> bytes:
        with self._lock:
            return b"".join(self._chunks)

    def text(self) -> str:
        """Decoded contents (UTF-8, undecodable bytes replaced).

        When the cap cut a multi-byte character in half, the dangling lead
        bytes are dropped rather than replaced with U+FFFD.
        """
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        return decoder.decode(self.getvalue(), final=not self._truncated)


__all__ = ["BoundedBuffer"]
