import unittest

from scrollback.scrollbar import Scrollbar, ScrollbarStyle


class TestVisibility(unittest.TestCase):
    def test_hidden_when_content_fits(self):
        self.assertFalse(Scrollbar.measure(0, 0, 5, 3).visible)
        self.assertFalse(Scrollbar.measure(0, 0, 5, 5).visible)

    def test_hidden_for_empty_viewport(self):
        self.assertFalse(Scrollbar.measure(0, 10, 0, 10).visible)

    def test_hidden_bar_draws_nothing(self):
        geom = Scrollbar.measure(0, 0, 5, 3)
        self.assertEqual(geom.rows(), [])
        self.assertEqual(Scrollbar.glyphs(geom), [])


class TestThumb(unittest.TestCase):
    def test_thumb_height_is_at_least_one(self):
        self.assertEqual(Scrollbar.measure(0, 7, 3, 10).thumb_height, 1)
        self.assertEqual(Scrollbar.measure(0, 14, 6, 20).thumb_height, 1)

    def test_thumb_height_scales_with_viewport(self):
        self.assertEqual(Scrollbar.measure(0, 10, 10, 20).thumb_height, 5)

    def test_thumb_position_follows_offset(self):
        self.assertEqual(Scrollbar.measure(0, 10, 10, 20).thumb_start, 0)
        self.assertEqual(Scrollbar.measure(5, 10, 10, 20).thumb_start, 2)
        bottom = Scrollbar.measure(10, 10, 10, 20)
        self.assertEqual(bottom.thumb_start + bottom.thumb_height, 10)

    def test_min_thumb_size_from_style(self):
        style = ScrollbarStyle(min_thumb_size=4)
        self.assertEqual(Scrollbar.measure(0, 7, 3, 10, style).thumb_height, 3)
        self.assertEqual(Scrollbar.measure(0, 14, 6, 20, style).thumb_height, 4)


class TestRows(unittest.TestCase):
    def test_every_row_is_thumb_or_track(self):
        geom = Scrollbar.measure(5, 10, 10, 20)
        rows = geom.rows()
        self.assertEqual(len(rows), 10)
        self.assertEqual(sum(rows), geom.thumb_height)
        self.assertEqual(rows.index(True), geom.thumb_start)

    def test_glyphs(self):
        geom = Scrollbar.measure(0, 7, 3, 10)
        self.assertEqual(Scrollbar.glyphs(geom), ["▌", "│", "│"])
        style = ScrollbarStyle(thumb_char="#", track_char=".")
        self.assertEqual(Scrollbar.glyphs(geom, style), ["#", ".", "."])


if __name__ == "__main__":
    unittest.main()
