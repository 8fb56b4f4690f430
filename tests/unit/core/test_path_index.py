"""Tests for the path <-> id index.

Covers id stability, reassignment after moves, and descendant rewriting.
"""

from __future__ import annotations

import unittest

from lazyfiles.path_index import PathIndex


class PathIndexTests(unittest.TestCase):
    def test_lookup_or_assign_is_stable_and_normalizes(self) -> None:
        index = PathIndex()
        first = index.lookup_or_assign("/r/a")
        second = index.lookup_or_assign("/r//b/")

        self.assertEqual((first, second), (1, 2))
        self.assertEqual(index.lookup_or_assign("/r/a"), first)
        self.assertEqual(index.lookup_or_assign("/r/b"), second)
        self.assertEqual(index.size, 2)
        self.assertEqual(index.resolve(second), "/r/b")
        self.assertEqual(index.id_of("/r/b/"), second)

    def test_resolve_unknown_or_missing_id_returns_none(self) -> None:
        index = PathIndex()
        index.lookup_or_assign("/r/a")
        self.assertIsNone(index.resolve(None))
        self.assertIsNone(index.resolve(99))

    def test_reassign_moves_identity_to_new_path(self) -> None:
        index = PathIndex()
        path_id = index.lookup_or_assign("/r/a")

        index.reassign("/r/a", "/r/c")

        self.assertEqual(index.id_of("/r/c"), path_id)
        self.assertIsNone(index.id_of("/r/a"))
        self.assertEqual(index.resolve(path_id), "/r/c")

    def test_reassign_rewrites_indexed_descendants_only(self) -> None:
        index = PathIndex()
        index.lookup_or_assign("/r/d")
        nested = index.lookup_or_assign("/r/d/e")
        sibling = index.lookup_or_assign("/r/dx")

        index.reassign("/r/d", "/s/d")

        self.assertEqual(index.resolve(nested), "/s/d/e")
        self.assertEqual(index.resolve(sibling), "/r/dx")
        self.assertIsNone(index.id_of("/r/d/e"))

    def test_reassign_onto_indexed_path_orphans_its_old_id(self) -> None:
        index = PathIndex()
        moved = index.lookup_or_assign("/r/a")
        displaced = index.lookup_or_assign("/r/x")

        index.reassign("/r/a", "/r/x")

        self.assertEqual(index.id_of("/r/x"), moved)
        self.assertIsNone(index.resolve(displaced))

    def test_reassign_of_unknown_path_is_noop(self) -> None:
        index = PathIndex()
        index.reassign("/nope", "/r/q")
        self.assertIsNone(index.id_of("/r/q"))
        self.assertEqual(len(index), 0)

    def test_ids_are_never_reused_after_reassign(self) -> None:
        index = PathIndex()
        index.lookup_or_assign("/r/a")
        index.lookup_or_assign("/r/b")
        index.reassign("/r/a", "/r/c")

        self.assertEqual(index.lookup_or_assign("/r/a"), 3)

    def test_reset_restarts_numbering(self) -> None:
        index = PathIndex()
        index.lookup_or_assign("/r/a")
        index.reset()
        self.assertEqual(index.size, 0)
        self.assertEqual(index.lookup_or_assign("/r/z"), 1)


if __name__ == "__main__":
    unittest.main()
