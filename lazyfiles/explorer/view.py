"""Per-path view state and the cursor reference variant."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..sync.lines import match_line_entry_name, match_line_offset


@dataclass(frozen=True)
class Coordinate:
    """Concrete cursor position: 1-based line, 0-based column."""

    line: int
    col: int = 0


@dataclass(frozen=True)
class NamedEntry:
    """Cursor remembered by entry name, resolved against current lines."""

    name: str


class _Unset:
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

CursorRef = Coordinate | NamedEntry | _Unset


def encode_cursor(cursor: CursorRef, lines: Sequence[str]) -> CursorRef:
    """Replace a coordinate by the entry name on its line.

    Directory contents may change before the view is shown again, so a name
    survives where a line number would not.
    """
    if not isinstance(cursor, Coordinate):
        return cursor
    if not 1 <= cursor.line <= len(lines):
        return UNSET
    name = match_line_entry_name(lines[cursor.line - 1])
    return NamedEntry(name) if name else UNSET


def decode_cursor(cursor: CursorRef, lines: Sequence[str]) -> Coordinate:
    """Resolve ``cursor`` to a coordinate valid for ``lines``.

    Named entries match the last line carrying that name; unknown names and
    unset cursors fall back to the first line. Coordinates are clamped.
    """
    if isinstance(cursor, Coordinate):
        line = min(max(cursor.line, 1), max(len(lines), 1))
        return clamp_to_name(Coordinate(line, cursor.col), lines)
    if isinstance(cursor, NamedEntry):
        found: Coordinate | None = None
        for line_no, line in enumerate(lines, start=1):
            if match_line_entry_name(line) == cursor.name:
                found = Coordinate(line_no, match_line_offset(line))
        if found is not None:
            return found
    first = lines[0] if lines else None
    return Coordinate(1, match_line_offset(first))


def clamp_to_name(cursor: Coordinate, lines: Sequence[str]) -> Coordinate:
    """Keep the cursor column out of the ``/<id>/<prefix>/`` header."""
    if not 1 <= cursor.line <= len(lines):
        return cursor
    offset = match_line_offset(lines[cursor.line - 1])
    if cursor.col >= offset:
        return cursor
    return Coordinate(cursor.line, offset)


@dataclass
class DirectoryView:
    """View state of one path, reused when the path is shown again."""

    buffer: int | None = None
    cursor: CursorRef = UNSET
    known_child_ids: tuple[int, ...] = field(default_factory=tuple)
    is_directory: bool = True

    def invalidate(self) -> None:
        self.buffer = None
        self.known_child_ids = ()


__all__ = [
    "Coordinate",
    "NamedEntry",
    "UNSET",
    "CursorRef",
    "encode_cursor",
    "decode_cursor",
    "clamp_to_name",
    "DirectoryView",
]
