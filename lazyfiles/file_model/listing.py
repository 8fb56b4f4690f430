"""Directory listing with pluggable filter/sort/prefix strategy."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..errors import IoError, NotFoundError
from .paths import child_path, normalize_path
from .types import Entry, EntryKind

if TYPE_CHECKING:
    from ..path_index import PathIndex

logger = logging.getLogger(__name__)

DIRECTORY_PREFIX = "d "
FILE_PREFIX = "- "


class ListingStrategy:
    """Filter, order, and decorate directory entries.

    Subclass and override any of the three hooks. ``accept`` and ``prefix``
    look at one entry; ``sort`` receives the already-filtered list.
    """

    def accept(self, entry: Entry) -> bool:
        return True

    def sort(self, entries: list[Entry]) -> list[Entry]:
        return sorted(entries, key=lambda item: (not item.is_dir, item.name.lower()))

    def prefix(self, entry: Entry) -> str:
        return DIRECTORY_PREFIX if entry.is_dir else FILE_PREFIX


class DefaultListingStrategy(ListingStrategy):
    """Directories first, case-insensitive names, optional dot-file hiding."""

    def __init__(self, show_hidden: bool = True) -> None:
        self.show_hidden = show_hidden

    def accept(self, entry: Entry) -> bool:
        return self.show_hidden or not entry.name.startswith(".")


def _scan(directory: str) -> list[Entry]:
    """Read ``directory`` once, returning id-less entries (``id == 0``)."""
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                entries.append(
                    Entry(
                        id=0,
                        name=child.name,
                        kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                        path=child_path(directory, child.name),
                    )
                )
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise NotFoundError(directory) from exc
    except OSError as exc:
        raise IoError(directory, exc) from exc
    return entries


def list_directory(
    directory: str,
    index: PathIndex,
    strategy: ListingStrategy | None = None,
) -> list[Entry]:
    """List ``directory`` through ``strategy`` and tag entries with path ids.

    Raises ``NotFoundError`` when the directory is gone and ``IoError`` when
    it cannot be read. Ids are assigned in final sorted order.
    """
    strategy = strategy or DefaultListingStrategy()
    directory = normalize_path(directory)
    scanned = _scan(directory)
    ordered = strategy.sort([entry for entry in scanned if strategy.accept(entry)])
    listed = [
        Entry(
            id=index.lookup_or_assign(entry.path),
            name=entry.name,
            kind=entry.kind,
            path=entry.path,
        )
        for entry in ordered
    ]
    logger.debug("listed %s: %d of %d entries", directory, len(listed), len(scanned))
    return listed


def entry_ids(entries: Iterable[Entry]) -> tuple[int, ...]:
    return tuple(entry.id for entry in entries)


__all__ = [
    "DIRECTORY_PREFIX",
    "FILE_PREFIX",
    "ListingStrategy",
    "DefaultListingStrategy",
    "list_directory",
    "entry_ids",
]
