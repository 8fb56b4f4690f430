"""Tests for notification coalescing and the focus poll gate."""

from __future__ import annotations

import unittest

from lazyfiles.explorer import Coordinate, FocusWatch, NotificationQueue


class NotificationQueueTests(unittest.TestCase):
    def test_last_cursor_per_buffer_wins(self) -> None:
        queue = NotificationQueue()
        queue.cursor_moved(1, 2, 0)
        queue.cursor_moved(1, 5, 3)
        queue.cursor_moved(2, 1)
        queue.text_changed(1)
        queue.text_changed(1)

        self.assertTrue(queue.has_pending)
        batch = queue.drain()

        self.assertEqual(batch.cursors, {1: Coordinate(5, 3), 2: Coordinate(1, 0)})
        self.assertEqual(batch.changed_buffers, {1})
        self.assertFalse(queue.has_pending)
        self.assertFalse(queue.drain())


class FocusWatchTests(unittest.TestCase):
    def test_due_only_after_interval_and_while_running(self) -> None:
        clock = [10.0]
        watch = FocusWatch(interval_seconds=1.0, monotonic=lambda: clock[0])

        self.assertFalse(watch.due())
        watch.start()
        self.assertTrue(watch.running)
        clock[0] = 10.5
        self.assertFalse(watch.due())
        clock[0] = 11.0
        self.assertTrue(watch.due())
        clock[0] = 11.5
        self.assertFalse(watch.due())

        watch.stop()
        clock[0] = 20.0
        self.assertFalse(watch.due())
        self.assertFalse(watch.running)


if __name__ == "__main__":
    unittest.main()
