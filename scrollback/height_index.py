from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Iterable, Tuple

@dataclass(frozen=True)
class HeightIndex:
    """
    Cumulative line positions for an ordered run of variable-height items.

    positions[i] is the first display line of item i, ends[i] the line just past it.
    Both are non-decreasing, so lookups bisect instead of scanning.
    """
    heights: Tuple[int, ...] = ()
    positions: Tuple[int, ...] = ()
    ends: Tuple[int, ...] = ()

    @classmethod
    def build(cls, heights: Iterable[int]) -> "HeightIndex":
        hs = tuple(int(h) for h in heights)
        positions = []
        ends = []
        cumulative = 0
        for h in hs:
            positions.append(cumulative)
            cumulative += h
            ends.append(cumulative)
        return cls(hs, tuple(positions), tuple(ends))

    def __len__(self) -> int:
        return len(self.heights)

    @property
    def total_lines(self) -> int:
        return self.ends[-1] if self.ends else 0

    def visible_range(self, offset: int, viewport_h: int) -> range:
        """
        Items overlapping display lines [offset, offset + viewport_h).
        Returns an empty range for no items, a non-positive viewport, or an offset
        past the end of the content.
        """
        if not self.heights or viewport_h <= 0:
            return range(0)
        # first item whose last line reaches past `offset`
        first = bisect.bisect_right(self.ends, offset)
        if first >= len(self.heights):
            return range(0)
        # last item that starts above the bottom edge
        last = bisect.bisect_left(self.positions, offset + viewport_h) - 1
        return range(first, max(first, last) + 1)

    def line_of(self, index: int) -> int:
        return self.positions[index]
