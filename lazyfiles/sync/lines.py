"""Directory-buffer line codec.

Each listed entry is rendered as ``/<id>/<prefix>/<name>``: a zero-padded path
id, a presentation prefix, then the display name. Users edit these lines
freely; parsing is tolerant of anything typed without the header.
"""

from __future__ import annotations

import re

_PATH_ID_RE = re.compile(r"^/(\d+)")
_HEADER_RE = re.compile(r"^/.*?/.*?/")
_BLANK_RE = re.compile(r"^\s*$")


def id_width(index_size: int) -> int:
    """Number of decimal digits needed for the largest id in the index."""
    return len(str(max(1, index_size)))


def format_entry_line(path_id: int, prefix: str, name: str, width: int) -> str:
    return f"/{path_id:0{width}d}/{prefix}/{name}"


def match_line_path_id(line: str | None) -> int | None:
    if line is None:
        return None
    match = _PATH_ID_RE.match(line)
    if match is None:
        return None
    return int(match.group(1))


def match_line_offset(line: str | None) -> int:
    """Return the index where the name starts (0 when there is no header)."""
    if line is None:
        return 0
    match = _HEADER_RE.match(line)
    return match.end() if match is not None else 0


def match_line_name(line: str) -> str:
    """Return the edited name: text after the header, or the whole line."""
    if match_line_path_id(line) is None:
        return line
    return line[match_line_offset(line):]


def match_line_entry_name(line: str | None) -> str | None:
    """Return the first path component of the name on ``line``.

    Stopping at the first separator keeps tracking entries typed as nested
    paths (``a/b.txt`` resolves to ``a``).
    """
    if line is None:
        return None
    return line[match_line_offset(line):].split("/", 1)[0]


def is_blank_line(line: str) -> bool:
    return _BLANK_RE.match(line) is not None


__all__ = [
    "id_width",
    "format_entry_line",
    "match_line_path_id",
    "match_line_offset",
    "match_line_name",
    "match_line_entry_name",
    "is_blank_line",
]
