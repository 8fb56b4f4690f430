"""Compare an edited directory buffer against its last rendered baseline."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..file_model.paths import SEPARATOR, child_path, normalize_path
from ..path_index import PathIndex
from .lines import is_blank_line, match_line_name, match_line_path_id


@dataclass(frozen=True)
class Diff:
    """Raw change of one entry: ``from`` missing means create, ``to`` missing means delete."""

    from_path: str | None
    to_path: str | None


def compute_buffer_diff(
    directory: str,
    lines: Sequence[str],
    known_child_ids: Iterable[int],
    index: PathIndex,
    modified: bool = True,
) -> list[Diff]:
    """Return raw diffs between ``lines`` and the ``known_child_ids`` baseline.

    Unchanged lines only mark their id as still present. Every baseline id
    that is not still present afterwards is reported as a deletion, including
    ids whose line now carries a different name; the classifier pairs those
    deletions with the matching change to form renames and moves.
    """
    if not modified:
        return []

    diffs: list[Diff] = []
    present_ids: set[int] = set()
    for line in lines:
        if is_blank_line(line):
            continue
        path_id = match_line_path_id(line)
        from_path = index.resolve(path_id)
        name_to = match_line_name(line)
        to_path = child_path(directory, name_to)
        if name_to.endswith(SEPARATOR):
            to_path += SEPARATOR

        if from_path is not None and from_path == normalize_path(to_path):
            present_ids.add(path_id)
            continue
        diffs.append(Diff(from_path=from_path, to_path=to_path))

    for known_id in known_child_ids:
        if known_id in present_ids:
            continue
        known_path = index.resolve(known_id)
        if known_path is None:
            continue
        diffs.append(Diff(from_path=known_path, to_path=None))

    return diffs


__all__ = [
    "Diff",
    "compute_buffer_diff",
]
