"""Domain datatypes for listed directory entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory, tagged with its path id."""

    id: int
    name: str
    kind: EntryKind
    path: str

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class FsEntry:
    """Filesystem data behind one buffer line, as reported to callers."""

    path: str
    name: str
    kind: EntryKind | None


__all__ = [
    "EntryKind",
    "Entry",
    "FsEntry",
]
