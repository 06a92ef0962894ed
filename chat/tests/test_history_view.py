import unittest

import pygame

from chat.history import ChatHistory
from chat.history_view import HistoryView
from scrollback.viewport import Viewport


class _CellFont:
    """ Fixed 8x16 cells; enough for grid math without initialising pygame.font. """
    def size(self, text):
        return (8 * len(text), 16)


class TestHistoryRows(unittest.TestCase):
    def setUp(self):
        self.view = HistoryView(_CellFont())
        self.history = ChatHistory()

    def _viewport(self, rows, cols=40):
        # built from the full history, so it opens pinned to the bottom
        return Viewport(self.history.messages, rows, width=cols, measure=self.history.measure)

    def test_grid_reserves_scrollbar_columns(self):
        self.assertEqual(self.view.grid(pygame.Rect(0, 0, 400, 160)), (48, 10))

    def test_rows_are_clipped_to_viewport(self):
        for i in range(5):
            self.history.receive(f"reply {i}")
        vp = self._viewport(6)
        frame = vp.frame()
        # 5 messages x 4 lines, offset 14: two lines of "reply 3" are above the top
        self.assertEqual((frame.offset, frame.clip_top), (14, 2))
        rows = self.view.visible_rows(frame, 40, 6)
        self.assertEqual(len(rows), 6)
        # pinned to bottom: the last row is the final message's margin line
        msg, line = rows[-1]
        self.assertEqual(msg.content, "reply 4")
        self.assertEqual(line.kind, "margin")

    def test_clip_top_skips_lines_of_first_item(self):
        for i in range(5):
            self.history.receive(f"reply {i}")
        vp = self._viewport(6)
        vp.scroll_by(-1)
        frame = vp.frame()
        self.assertEqual(frame.clip_top, 1)
        rows = self.view.visible_rows(frame, 40, 6)
        self.assertEqual(rows[0][0].content, "reply 3")
        self.assertEqual(rows[0][1].kind, "first")
        self.assertEqual(rows[-1][0].content, "reply 4")
        self.assertEqual(rows[-1][1].kind, "pad")

    def test_short_history_fills_fewer_rows(self):
        self.history.receive("only one")
        vp = self._viewport(10)
        frame = vp.frame()
        self.assertTrue(frame.bottom_aligned)
        self.assertEqual(len(self.view.visible_rows(frame, 40, 10)), 4)

    def test_timestamp_rows(self):
        view = HistoryView(_CellFont(), show_timestamp=True)
        history = ChatHistory(show_timestamp=True)
        history.receive("stamped")
        vp = Viewport(history.messages, 10, width=40, measure=history.measure)
        rows = view.visible_rows(vp.frame(), 40, 10)
        self.assertEqual([ln.kind for _, ln in rows], ["pad", "first", "pad", "stamp", "margin"])
        self.assertRegex(rows[3][1].text, r"^\d\d:\d\d$")
        self.assertEqual(vp.total_lines, len(rows))

    def test_spinner_advances(self):
        first = self.view.spinner()
        self.view.update(0.1)
        self.assertNotEqual(self.view.spinner(), first)


if __name__ == "__main__":
    unittest.main()
