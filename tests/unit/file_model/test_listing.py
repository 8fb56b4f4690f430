"""Tests for directory listing, preview lines, and path helpers."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyfiles.errors import NotFoundError
from lazyfiles.file_model import (
    DefaultListingStrategy,
    EntryKind,
    ListingStrategy,
    entry_ids,
    list_directory,
    read_preview_lines,
)
from lazyfiles.file_model import paths
from lazyfiles.file_model.preview import NON_TEXT_MARKER
from lazyfiles.path_index import PathIndex


def _make_tree(root: Path) -> None:
    (root / "b_dir").mkdir()
    (root / "A.txt").write_text("a\n", encoding="utf-8")
    (root / "c.txt").write_text("c\n", encoding="utf-8")
    (root / ".hidden").write_text("h\n", encoding="utf-8")


class ListDirectoryTests(unittest.TestCase):
    def test_directories_first_then_case_insensitive_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            index = PathIndex()

            entries = list_directory(str(root), index)

            self.assertEqual([entry.name for entry in entries], ["b_dir", ".hidden", "A.txt", "c.txt"])
            self.assertEqual(entries[0].kind, EntryKind.DIRECTORY)
            self.assertTrue(entries[0].is_dir)
            self.assertEqual(entry_ids(entries), (1, 2, 3, 4))
            self.assertEqual(entries[2].path, f"{root}/A.txt")

    def test_hidden_entries_filtered_and_ids_stay_stable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            index = PathIndex()
            all_entries = {entry.name: entry.id for entry in list_directory(str(root), index)}

            visible = list_directory(str(root), index, DefaultListingStrategy(show_hidden=False))

            self.assertEqual([entry.name for entry in visible], ["b_dir", "A.txt", "c.txt"])
            for entry in visible:
                self.assertEqual(entry.id, all_entries[entry.name])

    def test_custom_strategy_hooks_are_used(self) -> None:
        class TxtOnly(ListingStrategy):
            def accept(self, entry):
                return entry.name.endswith(".txt")

            def sort(self, entries):
                return sorted(entries, key=lambda item: item.name, reverse=True)

        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            entries = list_directory(str(root), PathIndex(), TxtOnly())

            self.assertEqual([entry.name for entry in entries], ["c.txt", "A.txt"])

    def test_missing_directory_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with self.assertRaises(NotFoundError):
                list_directory(str(root / "gone"), PathIndex())

    def test_listing_a_file_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).resolve() / "f.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(NotFoundError):
                list_directory(str(target), PathIndex())


class PreviewLinesTests(unittest.TestCase):
    def test_text_file_lines_are_truncated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).resolve() / "notes.txt"
            target.write_text("one\ntwo\nthree\n", encoding="utf-8")

            self.assertEqual(read_preview_lines(str(target), 2), ["one", "two"])
            self.assertEqual(read_preview_lines(str(target), 10), ["one", "two", "three"])

    def test_binary_file_renders_marker_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).resolve() / "blob.bin"
            target.write_bytes(b"\x00\x01\x02")

            lines = read_preview_lines(str(target), 10)

            self.assertEqual(len(lines), 1)
            self.assertTrue(lines[0].startswith(NON_TEXT_MARKER))
            self.assertEqual(len(lines[0]), 40)

    def test_latin1_file_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).resolve() / "legacy.txt"
            target.write_bytes("caf\xe9\n".encode("latin-1"))

            self.assertEqual(read_preview_lines(str(target), 5), ["caf\xe9"])

    def test_missing_file_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(NotFoundError):
                read_preview_lines(str(Path(tmp) / "nope.txt"), 5)


class PathHelperTests(unittest.TestCase):
    def test_normalize_path(self) -> None:
        self.assertEqual(paths.normalize_path("/a//b/"), "/a/b")
        self.assertEqual(paths.normalize_path("/"), "/")
        self.assertEqual(paths.normalize_path("//"), "/")

    def test_parent_path_stops_at_root(self) -> None:
        self.assertIsNone(paths.parent_path("/"))
        self.assertIsNone(paths.parent_path(""))
        self.assertEqual(paths.parent_path("/a"), "/")
        self.assertEqual(paths.parent_path("/a/b/"), "/a")

    def test_directory_marker(self) -> None:
        self.assertTrue(paths.is_directory_marker("/r/newdir/"))
        self.assertFalse(paths.is_directory_marker("/r/file"))
        self.assertFalse(paths.is_directory_marker("/"))

    def test_shorten_path_replaces_home_prefix(self) -> None:
        with mock.patch.dict(os.environ, {"HOME": "/home/u"}):
            self.assertEqual(paths.shorten_path("/home/u/docs"), "~/docs")
            self.assertEqual(paths.shorten_path("/home/u"), "~")
            self.assertEqual(paths.shorten_path("/home/user2"), "/home/user2")

    def test_is_descendant(self) -> None:
        self.assertTrue(paths.is_descendant("/a/b", "/a"))
        self.assertFalse(paths.is_descendant("/ab", "/a"))
        self.assertTrue(paths.is_descendant("/a", "/"))
        self.assertFalse(paths.is_descendant("/", "/"))


if __name__ == "__main__":
    unittest.main()
