"""Classify raw diffs into typed filesystem actions.

``delete + copy`` of the same source collapses into a rename (same parent
directory) or a move (different parent). Execution order is fixed to
copy, create, move, rename, delete.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..file_model.paths import basename, is_directory_marker, parent_path, shorten_path
from .diff import Diff
from .ordered import OrderedPathSet

ACTION_ORDER = ("copy", "create", "move", "rename", "delete")


@dataclass(frozen=True)
class Transfer:
    """Source/destination pair of a copy, move, or rename."""

    from_path: str
    to_path: str


@dataclass
class FsActions:
    copy: list[Transfer] = field(default_factory=list)
    create: list[str] = field(default_factory=list)
    move: list[Transfer] = field(default_factory=list)
    rename: list[Transfer] = field(default_factory=list)
    delete: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.copy or self.create or self.move or self.rename or self.delete)

    def __len__(self) -> int:
        return len(self.copy) + len(self.create) + len(self.move) + len(self.rename) + len(self.delete)

    def ordered(self) -> Iterator[tuple[str, Transfer | str]]:
        """Yield ``(kind, action)`` in execution order."""
        for kind in ACTION_ORDER:
            for action in getattr(self, kind):
                yield kind, action


def classify_diffs(diffs: Iterable[Diff]) -> FsActions:
    """Turn raw diffs (possibly from several buffers) into ``FsActions``."""
    actions = FsActions()
    pending_delete = OrderedPathSet()
    candidate_copies: list[Transfer] = []

    for diff in diffs:
        if diff.from_path is None:
            if diff.to_path is not None:
                actions.create.append(diff.to_path)
        elif diff.to_path is None:
            pending_delete.add(diff.from_path)
        else:
            candidate_copies.append(Transfer(diff.from_path, diff.to_path))

    for transfer in candidate_copies:
        if not pending_delete.consume(transfer.from_path):
            actions.copy.append(transfer)
            continue
        if parent_path(transfer.from_path) == parent_path(transfer.to_path):
            actions.rename.append(transfer)
        else:
            actions.move.append(transfer)

    actions.delete.extend(pending_delete)
    return actions


def _quoted_basename(path: str) -> str:
    return f"'{basename(path)}'"


def actions_to_lines(actions: FsActions) -> list[str]:
    """Human-readable confirmation text grouped by source directory."""
    per_directory: dict[str, list[str]] = {}

    def directory_lines(path: str) -> list[str]:
        directory = shorten_path(parent_path(path) or path)
        return per_directory.setdefault(directory, [])

    for transfer in actions.copy:
        directory_lines(transfer.from_path).append(
            f"    COPY: {_quoted_basename(transfer.from_path)} to '{shorten_path(transfer.to_path)}'"
        )
    for path in actions.create:
        kind = "directory" if is_directory_marker(path) else "file"
        directory_lines(path).append(f"  CREATE: {_quoted_basename(path)} ({kind})")
    for path in actions.delete:
        directory_lines(path).append(f"  DELETE: {_quoted_basename(path)}")
    for transfer in actions.move:
        directory_lines(transfer.from_path).append(
            f"    MOVE: {_quoted_basename(transfer.from_path)} to '{shorten_path(transfer.to_path)}'"
        )
    for transfer in actions.rename:
        directory_lines(transfer.from_path).append(
            f"  RENAME: {_quoted_basename(transfer.from_path)} to {_quoted_basename(transfer.to_path)}"
        )

    lines = ["CONFIRM FILE SYSTEM ACTIONS", ""]
    for directory, entries in per_directory.items():
        lines.append(f"{directory}:")
        lines.extend(entries)
        lines.append("")
    return lines


__all__ = [
    "ACTION_ORDER",
    "Transfer",
    "FsActions",
    "classify_diffs",
    "actions_to_lines",
]
