"""Tests for preview sanitization and Pygments line highlighting."""

from __future__ import annotations

import re
import unittest

from lazyfiles.highlight import colorize_lines, sanitize_terminal_text

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class HighlightTests(unittest.TestCase):
    def test_sanitize_terminal_text_escapes_control_bytes_but_keeps_common_whitespace(self) -> None:
        source = "a\tb\nc\rd\x07e\x1bf"
        sanitized = sanitize_terminal_text(source)

        self.assertEqual(sanitized, "a\tb\nc\rd\\x07e\\x1bf")
        self.assertNotIn("\x07", sanitized)

    def test_colorize_lines_keeps_one_row_per_line(self) -> None:
        lines = ["def f():", "    return 1"]

        rendered = colorize_lines(lines, "/tmp/example.py")

        self.assertEqual(len(rendered), 2)
        self.assertIn("\x1b[", "".join(rendered))
        self.assertEqual([ANSI_RE.sub("", row) for row in rendered], lines)

    def test_unknown_style_and_extension_still_render(self) -> None:
        lines = ["plain words"]
        rendered = colorize_lines(lines, "/tmp/notes.unknown-ext", style="no-such-style")
        self.assertEqual([ANSI_RE.sub("", row) for row in rendered], lines)

    def test_empty_preview(self) -> None:
        self.assertEqual(colorize_lines([], "/tmp/a.py"), [])


if __name__ == "__main__":
    unittest.main()
