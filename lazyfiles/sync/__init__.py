"""Text-edit to filesystem-action synchronization pipeline.

- line codec for ``/<id>/<prefix>/<name>`` buffer lines
- diff engine against the last rendered id baseline
- action classification (copy/create/move/rename/delete)
- ordered application through a filesystem service
"""

from __future__ import annotations

from .actions import ACTION_ORDER, FsActions, Transfer, actions_to_lines, classify_diffs
from .apply import ActionOutcome, apply_actions
from .diff import Diff, compute_buffer_diff
from .lines import (
    format_entry_line,
    id_width,
    match_line_entry_name,
    match_line_name,
    match_line_offset,
    match_line_path_id,
)
from .ordered import OrderedPathSet

__all__ = [
    "ACTION_ORDER",
    "ActionOutcome",
    "Diff",
    "FsActions",
    "OrderedPathSet",
    "Transfer",
    "actions_to_lines",
    "apply_actions",
    "classify_diffs",
    "compute_buffer_diff",
    "format_entry_line",
    "id_width",
    "match_line_entry_name",
    "match_line_name",
    "match_line_offset",
    "match_line_path_id",
]
