from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from scrollback.height_index import HeightIndex
from scrollback.scroll_model import ScrollController
from scrollback.scrollbar import Scrollbar, ScrollbarGeometry, ScrollbarStyle

logger = logging.getLogger(__name__)

# measure(content, width) -> height in display lines
Measure = Callable[[Any, int], int]

@dataclass(frozen=True)
class DisplayItem:
    content: Any
    height: int = 1

ItemLike = Union[DisplayItem, Tuple[Any, Optional[int]], Any]

# ---------- events ----------
@dataclass(frozen=True)
class ScrollBy:
    delta: int

@dataclass(frozen=True)
class JumpTrigger:
    counter: int

@dataclass(frozen=True)
class Resize:
    height: int
    width: Optional[int] = None

@dataclass(frozen=True)
class ItemsAppended:
    items: Tuple[ItemLike, ...]

@dataclass(frozen=True)
class ItemsReplaced:
    items: Tuple[ItemLike, ...]

ViewportEvent = Union[ScrollBy, JumpTrigger, Resize, ItemsAppended, ItemsReplaced]

@dataclass(frozen=True)
class ViewportFrame:
    items: List[DisplayItem]                    # visible slice, in order
    first_index: int                            # index of items[0] in the full sequence
    clip_top: int                               # lines of items[0] above the viewport
    bottom_aligned: bool                        # content shorter than the viewport
    scrollbar: Optional[ScrollbarGeometry]      # None when there is nothing to scroll
    offset: int
    max_offset: int
    total_lines: int
    pinned: bool


class Viewport:
    """
    Thin wrapper that wires:
      - HeightIndex      (line positions of every item)
      - ScrollController (offset + clamp rules)
      - Scrollbar        (thumb geometry)

    Items are DisplayItems, (content, height) pairs, or bare contents. Bare contents
    and pairs with a None height are measured with `measure(content, width)` when a
    measure function is given, otherwise they count as one line each. Heights below one are raised to one.
    With a measure function every item is re-measured when the width changes.
    """
    def __init__(
        self,
        items: Iterable[ItemLike] = (),
        viewport_h: int = 0,
        *,
        width: int = 0,
        measure: Optional[Measure] = None,
        show_scrollbar: bool = True,
        trigger: int = 0,
        scrollbar_style: Optional[ScrollbarStyle] = None,
    ):
        self.width = int(width)
        self.show_scrollbar = bool(show_scrollbar)
        self.scrollbar_style = scrollbar_style or ScrollbarStyle()
        self._measure = measure
        self._items: List[DisplayItem] = [self._coerce(it) for it in items]
        self.index = HeightIndex.build(it.height for it in self._items)
        self.scroll = ScrollController(self.index.total_lines, viewport_h, trigger)

    # ---------- queries ----------
    @property
    def items(self) -> Sequence[DisplayItem]:
        return tuple(self._items)

    @property
    def viewport_h(self) -> int:
        return self.scroll.viewport_h

    @property
    def total_lines(self) -> int:
        return self.index.total_lines

    def pinned(self) -> bool:
        return self.scroll.state.pinned()

    # ---------- input events ----------
    def scroll_by(self, delta: int) -> bool:
        return self.scroll.scroll_by(delta)

    def jump_to_bottom(self) -> bool:
        return self.scroll.jump_to_bottom()

    def jump_to_bottom_trigger(self, counter: int) -> bool:
        return self.scroll.on_jump_trigger(counter)

    def on_resize(self, height: int, width: Optional[int] = None) -> bool:
        """
        Viewport height is applied before any re-measure so the content clamp runs
        against the new max offset.
        """
        changed = self.scroll.on_resize(height)
        if width is not None and int(width) != self.width:
            self.width = int(width)
            changed = True
            if self._measure is not None:
                self._items = [DisplayItem(it.content, self._measure_one(it.content)) for it in self._items]
                self._reindex()
        return changed

    def on_items_appended(self, items: Iterable[ItemLike]) -> None:
        new = [self._coerce(it) for it in items]
        if not new:
            return
        self._items.extend(new)
        self._reindex()

    def set_items(self, items: Iterable[ItemLike]) -> None:
        """ Replace the whole sequence, e.g. after a message's text (and height) changed. """
        self._items = [self._coerce(it) for it in items]
        self._reindex()

    # ---------- batched update ----------
    def apply(self, event: ViewportEvent) -> None:
        if isinstance(event, ScrollBy):
            self.scroll_by(event.delta)
        elif isinstance(event, JumpTrigger):
            self.jump_to_bottom_trigger(event.counter)
        elif isinstance(event, Resize):
            self.on_resize(event.height, event.width)
        elif isinstance(event, ItemsAppended):
            self.on_items_appended(event.items)
        elif isinstance(event, ItemsReplaced):
            self.set_items(event.items)
        else:
            raise TypeError(f"unknown viewport event: {event!r}")

    def update(self, *events: ViewportEvent) -> ViewportFrame:
        """
        Apply one cycle's events and return the resulting frame.
        Resizes go first; everything else keeps arrival order.
        """
        resizes = [e for e in events if isinstance(e, Resize)]
        rest = [e for e in events if not isinstance(e, Resize)]
        for e in resizes + rest:
            self.apply(e)
        return self.frame()

    # ---------- output ----------
    def frame(self) -> ViewportFrame:
        st = self.scroll.state
        rng = self.index.visible_range(st.offset, st.viewport_h)
        if rng:
            visible = self._items[rng.start:rng.stop]
            first = rng.start
            clip_top = max(0, st.offset - self.index.line_of(first))
        else:
            visible, first, clip_top = [], 0, 0

        scrollbar = None
        if self.show_scrollbar:
            geom = Scrollbar.measure(st.offset, st.max(), st.viewport_h, st.content_h, self.scrollbar_style)
            scrollbar = geom if geom.visible else None

        return ViewportFrame(
            items=visible,
            first_index=first,
            clip_top=clip_top,
            bottom_aligned=st.bottom_aligned(),
            scrollbar=scrollbar,
            offset=st.offset,
            max_offset=st.max(),
            total_lines=st.content_h,
            pinned=st.pinned(),
        )

    # ---------- internals ----------
    def _reindex(self) -> None:
        self.index = HeightIndex.build(it.height for it in self._items)
        self.scroll.on_content_changed(self.index.total_lines)
        logger.debug("reindexed %d items (%d lines)", len(self._items), self.index.total_lines)

    def _measure_one(self, content: Any) -> int:
        if self._measure is None:
            return 1
        return max(1, int(self._measure(content, self.width)))

    def _coerce(self, obj: ItemLike) -> DisplayItem:
        # every item takes at least one line, or the cumulative ends stop increasing
        if isinstance(obj, DisplayItem):
            return obj if obj.height >= 1 else DisplayItem(obj.content, 1)
        if isinstance(obj, tuple) and len(obj) == 2:
            content, h = obj
            return DisplayItem(content, self._measure_one(content) if h is None else max(1, int(h)))
        return DisplayItem(obj, self._measure_one(obj))
