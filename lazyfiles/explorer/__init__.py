"""Column explorer state and the controller that drives it.

Contains the branch of displayed paths, per-path views with cursor
references, the session registry with anchor history, the deferred settle
queue, and ``ExplorerController``.
"""

from __future__ import annotations

from .branch import MAX_COLUMNS, PLACEHOLDER, Branch
from .controller import ColumnSnapshot, ExplorerController, SyncReport
from .registry import Explorer, ExplorerRegistry
from .settle import FocusWatch, NotificationQueue, SettleBatch
from .view import UNSET, Coordinate, CursorRef, DirectoryView, NamedEntry, decode_cursor, encode_cursor

__all__ = [
    "Branch",
    "ColumnSnapshot",
    "Coordinate",
    "CursorRef",
    "DirectoryView",
    "Explorer",
    "ExplorerController",
    "ExplorerRegistry",
    "FocusWatch",
    "MAX_COLUMNS",
    "NamedEntry",
    "NotificationQueue",
    "PLACEHOLDER",
    "SettleBatch",
    "SyncReport",
    "UNSET",
    "decode_cursor",
    "encode_cursor",
]
