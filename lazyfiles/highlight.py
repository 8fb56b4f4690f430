"""Terminal syntax highlighting for file preview columns.

Uses Pygments with a ``TerminalFormatter``; preview text is sanitized first so
control bytes in a previewed file cannot move the terminal cursor.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_lines(lines: list[str], path: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Highlight preview ``lines`` of ``path``; one output line per input line."""
    if not lines:
        return []
    source = sanitize_terminal_text("\n".join(lines))
    try:
        lexer = get_lexer_for_filename(Path(path).name, source)
    except ClassNotFound:
        lexer = TextLexer()
    rendered = pygments_highlight(source, lexer, _formatter_for_style(_normalize_style(style)))
    out = rendered.rstrip("\n").split("\n")
    if len(out) != len(lines):
        # Lexers may swallow or add blank lines; keep the column aligned.
        return source.split("\n")
    return out


__all__ = [
    "DEFAULT_STYLE",
    "colorize_lines",
    "sanitize_terminal_text",
]
