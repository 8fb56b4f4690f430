"""Domain model for directory entries and their on-disk listing.

This package contains non-UI primitives:
- entry datatypes tagged with path ids
- string path helpers (normalize, parent, child, shorten)
- directory listing through a filter/sort/prefix strategy
- bounded text preview for files
"""

from __future__ import annotations

from .listing import DefaultListingStrategy, ListingStrategy, entry_ids, list_directory
from .paths import (
    basename,
    child_path,
    full_path,
    normalize_path,
    parent_path,
    path_exists,
    path_kind,
    shorten_path,
)
from .preview import read_preview_lines
from .types import Entry, EntryKind, FsEntry

__all__ = [
    "Entry",
    "EntryKind",
    "FsEntry",
    "ListingStrategy",
    "DefaultListingStrategy",
    "list_directory",
    "entry_ids",
    "read_preview_lines",
    "basename",
    "child_path",
    "full_path",
    "normalize_path",
    "parent_path",
    "path_exists",
    "path_kind",
    "shorten_path",
]
