"""Branch: the left-to-right chain of columns shown by the explorer.

A branch holds up to three slots. The empty string is the placeholder slot:
allowed leftmost (the middle column is the filesystem root) and rightmost (no
preview). Focus normally sits on the middle slot.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..errors import CorruptedStateError
from ..file_model.paths import parent_path, path_exists

PLACEHOLDER = ""
MAX_COLUMNS = 3
MIDDLE = 1


@dataclass
class Branch:
    paths: list[str] = field(default_factory=list)
    focus_depth: int = MIDDLE

    @classmethod
    def for_directory(cls, path: str) -> Branch:
        return cls([parent_path(path) or PLACEHOLDER, path, PLACEHOLDER], MIDDLE)

    @classmethod
    def for_file(cls, path: str) -> Branch:
        parent = parent_path(path) or PLACEHOLDER
        return cls([parent_path(parent) or PLACEHOLDER, parent, path], MIDDLE)

    def __len__(self) -> int:
        return len(self.paths)

    def copy(self) -> Branch:
        return Branch(list(self.paths), self.focus_depth)

    def at(self, depth: int) -> str | None:
        if 0 <= depth < len(self.paths):
            return self.paths[depth]
        return None

    @property
    def focused(self) -> str | None:
        return self.at(self.focus_depth)

    def real_paths(self) -> list[str]:
        return [path for path in self.paths if path != PLACEHOLDER]

    def depth_of(self, path: str) -> int | None:
        if path == PLACEHOLDER:
            return None
        for depth, depth_path in enumerate(self.paths):
            if depth_path == path:
                return depth
        return None

    def clamp_focus(self) -> None:
        self.focus_depth = min(max(self.focus_depth, 0), max(len(self.paths) - 1, 0))

    def descend(self, path: str) -> None:
        """Re-centre on ``path``: its parent left, placeholder right."""
        self.paths = [parent_path(path) or PLACEHOLDER, path, PLACEHOLDER]
        self.focus_depth = MIDDLE

    def ascend(self) -> bool:
        """Prepend the parent of the leftmost column; ``False`` at the root."""
        leftmost = self.at(0)
        if not leftmost:
            return False
        parent = parent_path(leftmost)
        if parent is None:
            self.paths.insert(0, PLACEHOLDER)
        else:
            self.paths.insert(0, parent)
        del self.paths[MAX_COLUMNS:]
        self.focus_depth = MIDDLE
        return True

    def truncate_after(self, depth: int) -> None:
        del self.paths[depth + 1:]
        self.clamp_focus()

    def trim_left(self) -> None:
        self.paths = self.paths[self.focus_depth:]
        self.focus_depth = 0

    def trim_right(self) -> None:
        self.truncate_after(self.focus_depth)

    def append(self, path: str) -> None:
        if len(self.paths) < MAX_COLUMNS:
            self.paths.append(path)

    def normalized(self, exists: Callable[[str], bool] = path_exists) -> Branch:
        """Return a copy without vanished paths and everything right of them.

        Placeholders are kept. Raises ``CorruptedStateError`` when no real
        path survives.
        """
        kept: list[str] = []
        for path in self.paths:
            if path != PLACEHOLDER and not exists(path):
                break
            kept.append(path)
        if not any(path != PLACEHOLDER for path in kept):
            raise CorruptedStateError(f"no valid column left in branch {self.paths!r}")
        result = Branch(kept, self.focus_depth)
        result.clamp_focus()
        return result


__all__ = [
    "PLACEHOLDER",
    "MAX_COLUMNS",
    "MIDDLE",
    "Branch",
]
