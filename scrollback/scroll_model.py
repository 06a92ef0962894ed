from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

@dataclass
class ScrollState:
    content_h: int = 0
    viewport_h: int = 0
    offset: int = 0

    def max(self) -> int: return max(0, self.content_h - self.viewport_h)
    def clamp(self): self.offset = max(0, min(self.max(), self.offset))
    def pinned(self) -> bool: return self.offset == self.max()
    def bottom_aligned(self) -> bool: return self.content_h < self.viewport_h


class ScrollController:
    """
    Owns one ScrollState and every way it can change.

    All offsets are in display lines. After each operation 0 <= offset <= max().
    "Pinned to bottom" is never stored; ask state.pinned().

    Jump-to-bottom requests arrive as a counter owned by the caller. Only a value
    strictly greater than the last one acted on moves the view, so re-sending the
    same counter (e.g. on every redraw) is harmless.
    """
    def __init__(self, content_h: int = 0, viewport_h: int = 0, trigger: int = 0):
        self.state = ScrollState(content_h=max(0, int(content_h)), viewport_h=max(0, int(viewport_h)))
        self.state.offset = self.state.max()
        self._last_trigger = int(trigger)

    # ---------- queries ----------
    @property
    def offset(self) -> int:
        return self.state.offset

    @property
    def max_offset(self) -> int:
        return self.state.max()

    @property
    def viewport_h(self) -> int:
        return self.state.viewport_h

    @property
    def content_h(self) -> int:
        return self.state.content_h

    @property
    def last_trigger(self) -> int:
        return self._last_trigger

    def half_page(self) -> int:
        return self.state.viewport_h // 2

    # ---------- relative / absolute moves ----------
    def scroll_by(self, delta: int) -> bool:
        before = self.state.offset
        self.state.offset += int(delta)
        self.state.clamp()
        return self._moved(before, "scroll_by(%d)" % delta)

    def jump_to_bottom(self) -> bool:
        before = self.state.offset
        self.state.offset = self.state.max()
        return self._moved(before, "jump_to_bottom")

    def on_jump_trigger(self, counter: int) -> bool:
        """ Jump to bottom iff `counter` went up since the last jump it caused. """
        counter = int(counter)
        if counter <= self._last_trigger:
            return False
        self._last_trigger = counter
        self.jump_to_bottom()
        return True

    # ---------- geometry changes ----------
    def on_content_changed(self, content_h: int) -> bool:
        """
        New total line count. Only clamps down: a reader scrolled up into history
        stays where they are when content grows underneath them.
        """
        before = self.state.offset
        self.state.content_h = max(0, int(content_h))
        self.state.clamp()
        return self._moved(before, "content -> %d lines" % self.state.content_h)

    def on_resize(self, viewport_h: int) -> bool:
        viewport_h = max(0, int(viewport_h))
        if viewport_h == self.state.viewport_h:
            return False
        before = self.state.offset
        self.state.viewport_h = viewport_h
        self.state.clamp()
        self._moved(before, "viewport -> %d lines" % viewport_h)
        return True

    # ---------- internals ----------
    def _moved(self, before: int, why: str) -> bool:
        after = self.state.offset
        if after != before:
            logger.debug("%s: offset %d -> %d (max %d)", why, before, after, self.state.max())
        return after != before
