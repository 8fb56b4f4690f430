"""Bidirectional path <-> integer id index.

Ids are small positive integers encoded into every directory-buffer line, so
user edits can be traced back to the filesystem object they started from.
Identity follows the object: after a move/rename the old id is reassigned to
the new path instead of allocating a fresh one.
"""

from __future__ import annotations

from .file_model.paths import is_descendant, normalize_path


class PathIndex:
    """Process-wide id registry, injected into listing/sync/explorer code."""

    def __init__(self) -> None:
        self._path_by_id: dict[int, str] = {}
        self._id_by_path: dict[str, int] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._path_by_id)

    @property
    def size(self) -> int:
        """Highest id handed out so far (0 when empty)."""
        return self._next_id - 1

    def lookup_or_assign(self, path: str) -> int:
        """Return the id for ``path``, allocating the next unused one if needed."""
        path = normalize_path(path)
        path_id = self._id_by_path.get(path)
        if path_id is not None:
            return path_id
        path_id = self._next_id
        self._next_id += 1
        self._path_by_id[path_id] = path
        self._id_by_path[path] = path_id
        return path_id

    def id_of(self, path: str) -> int | None:
        return self._id_by_path.get(normalize_path(path))

    def resolve(self, path_id: int | None) -> str | None:
        if path_id is None:
            return None
        return self._path_by_id.get(path_id)

    def reassign(self, from_path: str, to_path: str) -> None:
        """Move the id of ``from_path`` onto ``to_path``.

        Whatever id ``to_path`` had before is orphaned. Indexed descendants of
        a moved directory are rewritten too, so their ids keep following the
        moved objects. No-op when ``from_path`` has no id.
        """
        from_path = normalize_path(from_path)
        to_path = normalize_path(to_path)
        if from_path == to_path:
            return
        from_id = self._id_by_path.get(from_path)
        if from_id is None:
            return

        descendants = [
            (path, path_id)
            for path, path_id in self._id_by_path.items()
            if is_descendant(path, from_path)
        ]
        self._rebind(from_path, to_path, from_id)
        for old_path, path_id in descendants:
            self._rebind(old_path, to_path + old_path[len(from_path):], path_id)

    def _rebind(self, old_path: str, new_path: str, path_id: int) -> None:
        displaced_id = self._id_by_path.get(new_path)
        if displaced_id is not None and displaced_id != path_id:
            self._path_by_id.pop(displaced_id, None)
        if self._id_by_path.get(old_path) == path_id:
            del self._id_by_path[old_path]
        self._path_by_id[path_id] = new_path
        self._id_by_path[new_path] = path_id

    def reset(self) -> None:
        """Drop every mapping and restart ids from 1."""
        self._path_by_id.clear()
        self._id_by_path.clear()
        self._next_id = 1


__all__ = ["PathIndex"]
