"""Allocation scopes with different lifetimes.

An interpreter session owns two scopes:

    - arena:   long-lived, survives across top-level evaluations. Backs anything
               that must outlive a single call, ex. the closures built by define.
    - scratch: transient, reset by the host driver after every top-level
               expression. Backs concatenation buffers and similar temporaries.

Python manages the memory itself; a Scope makes the lifetimes explicit and lets a
host cap how much text a single evaluation may accumulate.
"""

from __future__ import annotations

from io import StringIO
from typing import Any, Optional

from ember.errors import EmberOutOfMemory


class Scope:
    __slots__ = ("name", "limit", "used", "_kept")

    def __init__(self, name: str, limit: Optional[int] = None):
        self.name: str = name
        self.limit: Optional[int] = limit
        self.used: int = 0
        self._kept: list[Any] = []

    def charge(self, size: int) -> None:
        """Account for `size` more characters; raises EmberOutOfMemory past the limit."""
        if self.limit is not None and self.used + size > self.limit:
            raise EmberOutOfMemory(
                f"{self.name} scope exhausted: {self.used + size} > {self.limit}"
            )
        self.used += size

    def keep(self, obj: Any, size: int = 0) -> Any:
        """Retain `obj` until the scope is reset."""
        self.charge(size)
        self._kept.append(obj)
        return obj

    def buffer(self) -> ScopedBuffer:
        return self.keep(ScopedBuffer(self))

    def release(self, buffer: ScopedBuffer) -> None:
        """Drop a buffer before the scope is reset, returning its charge."""
        self._kept.remove(buffer)
        self.used -= len(buffer)
        buffer.close()

    def reset(self) -> None:
        for obj in self._kept:
            if isinstance(obj, ScopedBuffer):
                obj.close()
        self._kept.clear()
        self.used = 0

    def __len__(self) -> int:
        return len(self._kept)

    def __repr__(self) -> str:
        limit = "unlimited" if self.limit is None else self.limit
        return f"<Scope {self.name} used={self.used} limit={limit} objects={len(self._kept)}>"


class ScopedBuffer:
    """Text accumulator whose growth is charged to its scope."""

    __slots__ = ("scope", "_io", "_size")

    def __init__(self, scope: Scope):
        self.scope: Scope = scope
        self._io: StringIO = StringIO()
        self._size: int = 0

    def write(self, text: str) -> None:
        self.scope.charge(len(text))
        self._io.write(text)
        self._size += len(text)

    def getvalue(self) -> str:
        return self._io.getvalue()

    def close(self) -> None:
        self._io.close()

    @property
    def closed(self) -> bool:
        return self._io.closed

    def __len__(self) -> int:
        return self._size
