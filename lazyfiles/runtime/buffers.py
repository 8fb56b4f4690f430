"""Text buffer service used to display and edit column contents.

A host editor implements ``TextBufferService`` over its own buffers.
``MemoryBufferService`` keeps lines in memory; it backs the CLI and tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


class TextBufferService(Protocol):
    def create(self, path: str) -> int: ...

    def render(self, buffer: int, lines: Sequence[str]) -> None: ...

    def read_lines(self, buffer: int) -> list[str]: ...

    def is_modified(self, buffer: int) -> bool: ...

    def is_valid(self, buffer: int | None) -> bool: ...

    def release(self, buffer: int) -> None: ...


@dataclass
class _MemoryBuffer:
    path: str
    lines: list[str] = field(default_factory=list)
    modified: bool = False


class MemoryBufferService:
    """In-memory buffers; ``edit`` stands in for a user changing text."""

    def __init__(self) -> None:
        self._buffers: dict[int, _MemoryBuffer] = {}
        self._next_handle = 1

    def create(self, path: str) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._buffers[handle] = _MemoryBuffer(path=path)
        return handle

    def render(self, buffer: int, lines: Sequence[str]) -> None:
        data = self._buffers[buffer]
        data.lines = list(lines)
        data.modified = False

    def edit(self, buffer: int, lines: Sequence[str]) -> None:
        data = self._buffers[buffer]
        data.lines = list(lines)
        data.modified = True

    def read_lines(self, buffer: int) -> list[str]:
        return list(self._buffers[buffer].lines)

    def is_modified(self, buffer: int) -> bool:
        data = self._buffers.get(buffer)
        return data is not None and data.modified

    def is_valid(self, buffer: int | None) -> bool:
        return buffer is not None and buffer in self._buffers

    def release(self, buffer: int) -> None:
        self._buffers.pop(buffer, None)

    def path_of(self, buffer: int) -> str | None:
        data = self._buffers.get(buffer)
        return data.path if data is not None else None

    def handles(self) -> list[int]:
        return list(self._buffers)


__all__ = [
    "TextBufferService",
    "MemoryBufferService",
]
