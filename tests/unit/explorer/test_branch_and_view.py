"""Tests for branch navigation/normalization and cursor references."""

from __future__ import annotations

import unittest

from lazyfiles.errors import CorruptedStateError
from lazyfiles.explorer import UNSET, Branch, Coordinate, NamedEntry, decode_cursor, encode_cursor
from lazyfiles.explorer.view import clamp_to_name


class BranchTests(unittest.TestCase):
    def test_for_directory_puts_parent_left_and_placeholder_right(self) -> None:
        branch = Branch.for_directory("/a/b")
        self.assertEqual(branch.paths, ["/a", "/a/b", ""])
        self.assertEqual(branch.focused, "/a/b")

    def test_root_directory_has_placeholder_on_the_left(self) -> None:
        self.assertEqual(Branch.for_directory("/").paths, ["", "/", ""])

    def test_for_file_previews_the_file(self) -> None:
        self.assertEqual(Branch.for_file("/a/b/f.txt").paths, ["/a", "/a/b", "/a/b/f.txt"])

    def test_ascend_until_root(self) -> None:
        branch = Branch.for_directory("/a/b")

        self.assertTrue(branch.ascend())
        self.assertEqual(branch.paths, ["/", "/a", "/a/b"])
        self.assertTrue(branch.ascend())
        self.assertEqual(branch.paths, ["", "/", "/a"])
        self.assertFalse(branch.ascend())
        self.assertEqual(branch.focus_depth, 1)

    def test_descend_recenters(self) -> None:
        branch = Branch.for_directory("/a")
        branch.descend("/a/b/c")
        self.assertEqual(branch.paths, ["/a/b", "/a/b/c", ""])

    def test_trim_left_and_right(self) -> None:
        branch = Branch(["/a", "/a/b", "/a/b/c"], 1)
        branch.trim_left()
        self.assertEqual((branch.paths, branch.focus_depth), (["/a/b", "/a/b/c"], 0))

        branch = Branch(["/a", "/a/b", "/a/b/c"], 1)
        branch.trim_right()
        self.assertEqual((branch.paths, branch.focus_depth), (["/a", "/a/b"], 1))

    def test_normalized_cuts_at_first_missing_path(self) -> None:
        branch = Branch(["/a", "/a/b", "/a/b/c"], 1)

        normalized = branch.normalized(exists=lambda path: path != "/a/b")

        self.assertEqual(normalized.paths, ["/a"])
        self.assertEqual(normalized.focus_depth, 0)
        self.assertEqual(branch.paths, ["/a", "/a/b", "/a/b/c"])

    def test_normalized_is_idempotent_and_keeps_placeholders(self) -> None:
        branch = Branch(["", "/", ""], 1)
        once = branch.normalized(exists=lambda path: True)
        twice = once.normalized(exists=lambda path: True)
        self.assertEqual(once.paths, ["", "/", ""])
        self.assertEqual(twice.paths, once.paths)
        self.assertEqual(twice.focus_depth, once.focus_depth)

    def test_normalized_without_any_real_path_is_corrupted(self) -> None:
        with self.assertRaises(CorruptedStateError):
            Branch(["/a", "/a/b", ""], 1).normalized(exists=lambda path: False)
        with self.assertRaises(CorruptedStateError):
            Branch(["", "/gone", ""], 1).normalized(exists=lambda path: False)


class CursorReferenceTests(unittest.TestCase):
    LINES = ["/1/d /sub", "/2/- /a.txt", "/3/- /b.txt"]

    def test_encode_turns_coordinate_into_entry_name(self) -> None:
        self.assertEqual(encode_cursor(Coordinate(2, 9), self.LINES), NamedEntry("a.txt"))
        self.assertIs(encode_cursor(Coordinate(9, 0), self.LINES), UNSET)
        self.assertEqual(encode_cursor(NamedEntry("keep"), self.LINES), NamedEntry("keep"))

    def test_decode_named_entry_finds_its_line(self) -> None:
        self.assertEqual(decode_cursor(NamedEntry("b.txt"), self.LINES), Coordinate(3, 6))

    def test_decode_falls_back_to_first_line(self) -> None:
        self.assertEqual(decode_cursor(NamedEntry("missing"), self.LINES), Coordinate(1, 6))
        self.assertEqual(decode_cursor(UNSET, self.LINES), Coordinate(1, 6))
        self.assertEqual(decode_cursor(UNSET, []), Coordinate(1, 0))

    def test_decode_clamps_coordinates(self) -> None:
        self.assertEqual(decode_cursor(Coordinate(10, 0), self.LINES), Coordinate(3, 6))
        self.assertEqual(decode_cursor(Coordinate(2, 8), self.LINES), Coordinate(2, 8))

    def test_clamp_keeps_column_out_of_header(self) -> None:
        self.assertEqual(clamp_to_name(Coordinate(1, 2), self.LINES), Coordinate(1, 6))
        self.assertEqual(clamp_to_name(Coordinate(1, 7), self.LINES), Coordinate(1, 7))
        self.assertEqual(clamp_to_name(Coordinate(5, 0), self.LINES), Coordinate(5, 0))


if __name__ == "__main__":
    unittest.main()
