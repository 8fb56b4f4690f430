"""Insertion-ordered set with an explicit consume-once operation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class OrderedPathSet:
    """Deduplicated, insertion-ordered paths.

    ``consume`` removes a path and reports whether it was present, so a
    pending deletion can be turned into a move/rename at most once.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._items: dict[str, None] = {}
        for path in paths:
            self.add(path)

    def add(self, path: str) -> None:
        self._items.setdefault(path, None)

    def consume(self, path: str) -> bool:
        if path not in self._items:
            return False
        del self._items[path]
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedPathSet({list(self._items)!r})"


__all__ = ["OrderedPathSet"]
