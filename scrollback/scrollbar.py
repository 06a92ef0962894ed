from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

@dataclass
class ScrollbarStyle:
    min_thumb_size: int = 1
    thumb_char: str = "▌"
    track_char: str = "│"
    thumb_rgb: tuple[int, int, int] = (0, 255, 255)
    track_rgb: tuple[int, int, int] = (90, 90, 96)
    def derive(self, **overrides): return replace(self, **overrides)

@dataclass(frozen=True)
class ScrollbarGeometry:
    visible: bool
    thumb_start: int = 0
    thumb_height: int = 0
    track_height: int = 0

    def is_thumb(self, row: int) -> bool:
        return self.visible and self.thumb_start <= row < self.thumb_start + self.thumb_height

    def rows(self) -> List[bool]:
        """ One flag per track row: True for thumb, False for track. """
        return [self.is_thumb(r) for r in range(self.track_height)] if self.visible else []

_HIDDEN = ScrollbarGeometry(visible=False)

class Scrollbar:
    """
    Stateless geometry for a one-column vertical scrollbar, in display lines.
    """
    @staticmethod
    def measure(offset: int, max_offset: int, viewport_h: int, total_lines: int,
                style: Optional[ScrollbarStyle] = None) -> ScrollbarGeometry:
        # content that fits gets no scrollbar at all, not even the track
        if viewport_h <= 0 or total_lines <= viewport_h:
            return _HIDDEN
        min_thumb = max(1, (style or ScrollbarStyle()).min_thumb_size)

        # thumb scales with viewport_h twice over: (h / total) * h
        thumb_h = max(min_thumb, (viewport_h * viewport_h) // total_lines)
        thumb_h = min(viewport_h, thumb_h)

        free = viewport_h - thumb_h
        if max_offset > 0:
            pos = max(0, min(max_offset, offset))
            thumb_y = (pos * free) // max_offset
        else:
            thumb_y = 0
        return ScrollbarGeometry(True, thumb_y, thumb_h, viewport_h)

    @staticmethod
    def glyphs(geometry: ScrollbarGeometry, style: Optional[ScrollbarStyle] = None) -> List[str]:
        sb = style or ScrollbarStyle()
        return [sb.thumb_char if thumb else sb.track_char for thumb in geometry.rows()]
