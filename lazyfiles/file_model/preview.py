"""File preview lines for the rightmost column."""

from __future__ import annotations

from itertools import islice
from pathlib import Path

from ..errors import IoError, NotFoundError

BINARY_SNIFF_BYTES = 1024
NON_TEXT_MARKER = "-Non-text-file"


def is_text_file(path: Path) -> bool:
    """Heuristic: no NUL byte within the first kilobyte."""
    with path.open("rb") as handle:
        return b"\0" not in handle.read(BINARY_SNIFF_BYTES)


def _read_head(path: Path, max_lines: int, encoding: str) -> list[str]:
    with path.open("r", encoding=encoding, newline=None) as handle:
        return [line.rstrip("\n") for line in islice(handle, max_lines)]


def read_preview_lines(path: str, max_lines: int, width: int = 40) -> list[str]:
    """Return up to ``max_lines`` lines of ``path`` for display.

    Non-text files render as a single marker line padded with ``-``.
    """
    target = Path(path)
    try:
        if not is_text_file(target):
            return [NON_TEXT_MARKER + "-" * max(0, width - len(NON_TEXT_MARKER))]
        for encoding in ("utf-8", "utf-8-sig", "latin-1"):
            try:
                return _read_head(target, max_lines, encoding)
            except UnicodeDecodeError:
                continue
    except FileNotFoundError as exc:
        raise NotFoundError(path) from exc
    except OSError as exc:
        raise IoError(path, exc) from exc
    return []


__all__ = [
    "NON_TEXT_MARKER",
    "is_text_file",
    "read_preview_lines",
]
