"""Filesystem primitives consumed by the action applier.

Every primitive refuses to overwrite an existing destination
(``PathExistsError``), reports a vanished source as ``NotFoundError`` and
wraps anything else from the OS as ``IoError``. Missing parent directories
of a destination are created so nested names like ``a/b.txt`` work.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

from platformdirs import user_data_dir

from ..errors import IoError, NotFoundError, PathExistsError
from ..file_model.paths import basename, is_directory_marker, normalize_path, parent_path

logger = logging.getLogger(__name__)

APP_NAME = "lazyfiles"
DEFAULT_TRASH_DIR = Path(user_data_dir(APP_NAME, appauthor=False)) / "trash"


class FileSystemService(Protocol):
    def create(self, path: str) -> None: ...

    def copy(self, from_path: str, to_path: str) -> None: ...

    def move(self, from_path: str, to_path: str) -> None: ...

    def rename(self, from_path: str, to_path: str) -> None: ...

    def delete(self, path: str, permanent: bool) -> None: ...


class LocalFileSystem:
    """``os``/``shutil`` backed implementation of ``FileSystemService``."""

    def __init__(self, trash_dir: Path | None = None) -> None:
        self.trash_dir = trash_dir if trash_dir is not None else DEFAULT_TRASH_DIR

    @staticmethod
    def _ensure_parent(path: str) -> None:
        parent = parent_path(path)
        if parent is None:
            return
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as exc:
            raise IoError(parent, exc) from exc

    def create(self, path: str) -> None:
        """Create an empty file, or a directory when ``path`` ends with ``/``."""
        target = normalize_path(path)
        if os.path.lexists(target):
            raise PathExistsError(target, "create")
        self._ensure_parent(target)
        try:
            if is_directory_marker(path):
                os.mkdir(target)
            else:
                with open(target, "x", encoding="utf-8"):
                    pass
        except FileExistsError as exc:
            raise PathExistsError(target, "create") from exc
        except OSError as exc:
            raise IoError(target, exc) from exc
        logger.info("created %s", target)

    def copy(self, from_path: str, to_path: str) -> None:
        source = normalize_path(from_path)
        target = normalize_path(to_path)
        if os.path.lexists(target):
            raise PathExistsError(target, "copy")
        if not os.path.lexists(source):
            raise NotFoundError(source)
        self._ensure_parent(target)
        try:
            if os.path.isdir(source) and not os.path.islink(source):
                shutil.copytree(source, target, symlinks=True)
            else:
                shutil.copy2(source, target, follow_symlinks=False)
        except OSError as exc:
            raise IoError(source, exc) from exc
        logger.info("copied %s to %s", source, target)

    def move(self, from_path: str, to_path: str) -> None:
        source = normalize_path(from_path)
        target = normalize_path(to_path)
        if os.path.lexists(target):
            raise PathExistsError(target, "move or rename")
        if not os.path.lexists(source):
            raise NotFoundError(source)
        self._ensure_parent(target)
        try:
            shutil.move(source, target)
        except OSError as exc:
            raise IoError(source, exc) from exc
        logger.info("moved %s to %s", source, target)

    def rename(self, from_path: str, to_path: str) -> None:
        self.move(from_path, to_path)

    def delete(self, path: str, permanent: bool) -> None:
        """Remove ``path`` for good, or move it into the trash directory.

        An older trash item with the same basename is replaced.
        """
        target = normalize_path(path)
        if not os.path.lexists(target):
            raise NotFoundError(target)
        try:
            if permanent:
                if os.path.isdir(target) and not os.path.islink(target):
                    shutil.rmtree(target)
                else:
                    os.remove(target)
                logger.info("deleted %s", target)
                return

            self.trash_dir.mkdir(parents=True, exist_ok=True)
            trash_path = self.trash_dir / basename(target)
            if trash_path.is_dir() and not trash_path.is_symlink():
                shutil.rmtree(trash_path)
            elif os.path.lexists(trash_path):
                trash_path.unlink()
            shutil.move(target, str(trash_path))
        except OSError as exc:
            raise IoError(target, exc) from exc
        logger.info("moved %s to trash %s", target, self.trash_dir)


__all__ = [
    "DEFAULT_TRASH_DIR",
    "FileSystemService",
    "LocalFileSystem",
]
