"""Plain-terminal rendering of explorer columns.

Lays the column snapshots side by side with a title row, marking the focused
column and each column's cursor line. Width math is ANSI-aware so highlighted
file previews keep the grid aligned.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Sequence

from .explorer.controller import ColumnSnapshot
from .sync.lines import match_line_offset

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ANSI_RESET = "\033[0m"
TAB_STOP = 8
SEPARATOR = " │ "
CURSOR_MARK = ">"
MODIFIED_MARK = "*"

PreviewColorizer = Callable[[list[str], str], list[str]]


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Display width after removing ANSI escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim and tabs become spaces.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1
    return "".join(out)


def fit_cell(text: str, width: int) -> str:
    """Clip or pad ``text`` to exactly ``width`` display columns."""
    clipped = clip_ansi_line(text, width)
    if "\x1b" in clipped:
        clipped += ANSI_RESET
    return clipped + " " * max(0, width - display_width(clipped))


def _column_rows(column: ColumnSnapshot, colorize: PreviewColorizer | None) -> list[str]:
    if column.is_directory:
        # Users read names, not ids; the header stays in the buffer only.
        body = [line[match_line_offset(line):] for line in column.lines]
    elif colorize is not None:
        body = colorize(list(column.lines), column.path)
    else:
        body = list(column.lines)

    cursor_line = column.cursor.line if column.cursor is not None and column.is_directory else None
    rows: list[str] = []
    for line_no, text in enumerate(body, start=1):
        mark = CURSOR_MARK if line_no == cursor_line else " "
        rows.append(f"{mark}{text}")
    return rows


def _title(column: ColumnSnapshot) -> str:
    if not column.path:
        return ""
    title = column.title
    if column.modified:
        title += MODIFIED_MARK
    if column.is_focus:
        title = f"[{title}]"
    return title


def render_columns(
    columns: Sequence[ColumnSnapshot],
    width: int = 120,
    height: int | None = None,
    colorize: PreviewColorizer | None = None,
) -> list[str]:
    """Render ``columns`` into ``width``-wide text rows.

    ``height`` limits body rows (title row excluded). ``colorize`` styles
    file preview lines, e.g. ``highlight.colorize_lines``.
    """
    if not columns:
        return []
    count = len(columns)
    cell_width = max(1, (width - len(SEPARATOR) * (count - 1)) // count)
    bodies = [_column_rows(column, colorize) for column in columns]
    body_height = max((len(body) for body in bodies), default=0)
    if height is not None:
        body_height = min(body_height, max(0, height))

    rows = [SEPARATOR.join(fit_cell(_title(column), cell_width) for column in columns).rstrip()]
    for row_idx in range(body_height):
        cells = [fit_cell(body[row_idx] if row_idx < len(body) else "", cell_width) for body in bodies]
        rows.append(SEPARATOR.join(cells).rstrip())
    return rows


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_cell",
    "render_columns",
]
