"""Source locations and the cursor that tracks them while reading.

Locations are zero-based internally and rendered one-based in diagnostics, the
way compilers report them: ``file:row:col``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ember.errors import EmberEndOfFile


@dataclass(frozen=True)
class Location:
    row: int
    col: int
    source_name: Optional[str] = None

    def format(self) -> str:
        if self.source_name is not None:
            return f"{self.source_name}:{self.row + 1}:{self.col + 1}"
        return f"{self.row + 1}:{self.col + 1}"

    def __str__(self) -> str:
        return self.format()


class Cursor:
    """Position inside a source text: offset, beginning of line and row."""

    __slots__ = ("source", "source_name", "pos", "bol", "row")

    def __init__(self, source: str, source_name: Optional[str] = None):
        self.source: str = source
        self.source_name: Optional[str] = source_name
        self.pos: int = 0
        self.bol: int = 0
        self.row: int = 0

    @property
    def col(self) -> int:
        return self.pos - self.bol

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def current(self) -> str:
        return self.source[self.pos]

    def location(self) -> Location:
        return Location(row=self.row, col=self.col, source_name=self.source_name)

    def advance(self) -> None:
        """Consume one character, updating row and column.

        Raises EmberEndOfFile when the cursor already sits at the end; callers
        use that as a boundary rather than as a failure.
        """
        if self.pos >= len(self.source):
            raise EmberEndOfFile(f"end of input at {self.location()}")
        if self.source[self.pos] == "\n":
            self.bol = self.pos + 1
            self.row += 1
        self.pos += 1

    def snapshot(self) -> tuple[int, int, int]:
        return self.pos, self.bol, self.row

    def restore(self, state: tuple[int, int, int]) -> None:
        self.pos, self.bol, self.row = state

    def fork(self) -> Cursor:
        """Independent cursor over the same source, at the same position."""
        other = Cursor(self.source, self.source_name)
        other.restore(self.snapshot())
        return other

    def __repr__(self) -> str:
        return f"<Cursor {self.location()} pos={self.pos}>"
