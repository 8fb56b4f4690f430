"""Tests for the side-by-side column text renderer."""

from __future__ import annotations

import unittest

from lazyfiles.explorer import ColumnSnapshot, Coordinate
from lazyfiles.render import display_width, fit_cell, render_columns


def _column(depth: int, path: str, title: str, lines: tuple[str, ...], **kwargs) -> ColumnSnapshot:
    values = {
        "cursor": Coordinate(1, 0),
        "is_focus": False,
        "is_directory": True,
        "modified": False,
    }
    values.update(kwargs)
    return ColumnSnapshot(depth=depth, path=path, title=title, lines=lines, **values)


class ColumnRenderTests(unittest.TestCase):
    def test_fit_cell_pads_and_clips(self) -> None:
        self.assertEqual(fit_cell("abc", 5), "abc  ")
        self.assertEqual(fit_cell("abcdefgh", 3), "abc")
        self.assertEqual(fit_cell("a\tb", 10), "a       b ")

    def test_display_width_ignores_ansi_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\x1b[31mab\x1b[0m"), 2)
        self.assertEqual(display_width("中"), 2)

    def test_render_columns_strips_headers_and_marks_cursor_and_focus(self) -> None:
        columns = [
            _column(0, "/srv", "/srv", ("/1/d /data",)),
            _column(1, "/srv/data", "data", ("/2/d /docs", "/3/- /x.txt"), cursor=Coordinate(2, 6), is_focus=True, modified=True),
            _column(2, "", "", (), cursor=None),
        ]

        rows = render_columns(columns, width=60)

        self.assertEqual(len(rows), 3)
        self.assertIn("[data*]", rows[0])
        self.assertIn(">data", rows[1])
        self.assertIn(" docs", rows[1])
        self.assertIn(">x.txt", rows[2])
        self.assertNotIn("/2/", "".join(rows))

    def test_file_preview_uses_colorizer(self) -> None:
        columns = [
            _column(0, "/srv", "/srv", ("/1/- /a.py",)),
            _column(1, "/srv/a.py", "a.py", ("print(1)",), is_directory=False),
        ]
        seen: list[tuple[list[str], str]] = []

        def colorize(lines: list[str], path: str) -> list[str]:
            seen.append((lines, path))
            return [line.upper() for line in lines]

        rows = render_columns(columns, width=40, colorize=colorize)

        self.assertEqual(seen, [(["print(1)"], "/srv/a.py")])
        self.assertIn("PRINT(1)", rows[1])

    def test_height_limits_body_rows(self) -> None:
        columns = [_column(0, "/srv", "/srv", tuple(f"/{i}/- /f{i}" for i in range(1, 10)))]
        self.assertEqual(len(render_columns(columns, width=20, height=3)), 4)
        self.assertEqual(render_columns([], width=20), [])


if __name__ == "__main__":
    unittest.main()
