"""String path helpers used by the index, listing, and sync pipeline.

Paths are kept as normalized absolute POSIX strings: repeated separators are
collapsed and a trailing separator is stripped (except for ``/``). The diff
pipeline re-appends a trailing ``/`` only where it marks a directory create.
"""

from __future__ import annotations

import os
import re

SEPARATOR = "/"
_REPEATED_SEPARATORS_RE = re.compile(r"/+")


def normalize_path(path: str) -> str:
    """Collapse repeated separators and drop a trailing one."""
    normalized = _REPEATED_SEPARATORS_RE.sub(SEPARATOR, path)
    if len(normalized) > 1 and normalized.endswith(SEPARATOR):
        normalized = normalized[:-1]
    return normalized


def full_path(path: str) -> str:
    """Return an absolute, user-expanded, normalized path."""
    return normalize_path(os.path.abspath(os.path.expanduser(path)))


def child_path(directory: str, name: str) -> str:
    return normalize_path(f"{directory}{SEPARATOR}{name}")


def parent_path(path: str) -> str | None:
    """Return the parent directory, or ``None`` for the filesystem root."""
    if not path:
        return None
    path = full_path(path)
    if path == SEPARATOR:
        return None
    return os.path.dirname(path) or SEPARATOR


def basename(path: str) -> str:
    return os.path.basename(normalize_path(path))


def shorten_path(path: str) -> str:
    """Replace the home directory prefix with ``~``."""
    path = normalize_path(path)
    home = normalize_path(os.path.expanduser("~"))
    if home != SEPARATOR and (path == home or path.startswith(home + SEPARATOR)):
        return "~" + path[len(home):]
    return path


def is_directory_marker(path: str) -> bool:
    """Return whether ``path`` carries the trailing-separator directory marker."""
    return len(path) > 1 and path.endswith(SEPARATOR)


def path_exists(path: str) -> bool:
    if not path:
        return False
    return os.path.exists(path)


def path_kind(path: str) -> str | None:
    """Return ``"directory"``, ``"file"``, or ``None`` when missing."""
    if not path_exists(path):
        return None
    return "directory" if os.path.isdir(path) else "file"


def is_descendant(path: str, ancestor: str) -> bool:
    """Return whether ``path`` lies strictly below ``ancestor``."""
    if ancestor == SEPARATOR:
        return path != SEPARATOR and path.startswith(SEPARATOR)
    return path.startswith(ancestor + SEPARATOR)


__all__ = [
    "SEPARATOR",
    "normalize_path",
    "full_path",
    "child_path",
    "parent_path",
    "basename",
    "shorten_path",
    "is_directory_marker",
    "path_exists",
    "path_kind",
    "is_descendant",
]
