import random
import unittest

from scrollback.height_index import HeightIndex


def linear_visible(heights, offset, viewport_h):
    """ Straight scan over items, as a reference for the bisect lookups. """
    if not heights or viewport_h <= 0:
        return range(0)
    positions, cum = [], 0
    for h in heights:
        positions.append(cum)
        cum += h
    first = None
    for i, (p, h) in enumerate(zip(positions, heights)):
        if p + h > offset:
            first = i
            break
    if first is None:
        return range(0)
    last = first
    for j in range(first, len(heights)):
        if positions[j] >= offset + viewport_h:
            break
        last = j
    return range(first, last + 1)


class TestBuild(unittest.TestCase):
    def test_positions_and_total(self):
        idx = HeightIndex.build([2, 3, 1])
        self.assertEqual(idx.positions, (0, 2, 5))
        self.assertEqual(idx.total_lines, 6)
        self.assertEqual(len(idx), 3)

    def test_empty(self):
        idx = HeightIndex.build([])
        self.assertEqual(idx.total_lines, 0)
        self.assertEqual(len(idx.visible_range(0, 5)), 0)


class TestVisibleRange(unittest.TestCase):
    def setUp(self):
        self.idx = HeightIndex.build([2, 3, 1])     # lines: 0-1 | 2-4 | 5

    def test_partial_items_at_both_edges(self):
        self.assertEqual(self.idx.visible_range(0, 3), range(0, 2))
        self.assertEqual(self.idx.visible_range(1, 2), range(0, 2))
        self.assertEqual(self.idx.visible_range(3, 3), range(1, 3))

    def test_single_item_filling_viewport(self):
        self.assertEqual(self.idx.visible_range(2, 3), range(1, 2))

    def test_viewport_taller_than_content_reaches_last_item(self):
        self.assertEqual(HeightIndex.build([1, 1]).visible_range(0, 10), range(0, 2))

    def test_degenerate_viewport_and_offset(self):
        self.assertEqual(len(self.idx.visible_range(0, 0)), 0)
        self.assertEqual(len(self.idx.visible_range(0, -4)), 0)
        self.assertEqual(len(self.idx.visible_range(6, 3)), 0)

    def test_matches_linear_scan(self):
        rng = random.Random(7)
        for _ in range(300):
            heights = [rng.randint(1, 6) for _ in range(rng.randint(0, 25))]
            idx = HeightIndex.build(heights)
            vh = rng.randint(0, 12)
            offset = rng.randint(0, max(0, idx.total_lines - 1))
            self.assertEqual(idx.visible_range(offset, vh), linear_visible(heights, offset, vh),
                             msg=f"heights={heights} offset={offset} vh={vh}")


class TestLineLookup(unittest.TestCase):
    def test_line_of(self):
        idx = HeightIndex.build([2, 3, 1])
        self.assertEqual([idx.line_of(i) for i in range(3)], [0, 2, 5])


if __name__ == "__main__":
    unittest.main()
