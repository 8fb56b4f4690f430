"""Error taxonomy shared by listing, synchronization, and explorer code.

Collaborator failures are raised as these types and caught at controller
entry points, which degrade to skip/normalize/close instead of propagating.
"""

from __future__ import annotations


class LazyFilesError(Exception):
    """Base class for every error raised by lazyfiles."""


class NotFoundError(LazyFilesError):
    """Path vanished (or never existed) between two operations."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Path not found: {path}")


class PathExistsError(LazyFilesError):
    """Destination already exists; the action is refused, never overwritten."""

    def __init__(self, path: str, action: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"Can not {action} {path}. Target path already exists.")


class IoError(LazyFilesError):
    """Permission, device, or other I/O failure for a single operation."""

    def __init__(self, path: str, cause: OSError | None = None) -> None:
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"I/O error for {path}{detail}")


class CorruptedStateError(LazyFilesError):
    """Branch has no valid column left; the explorer has to close."""


__all__ = [
    "LazyFilesError",
    "NotFoundError",
    "PathExistsError",
    "IoError",
    "CorruptedStateError",
]
