from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from chat.messages import ChatMessage, MessageLine, message_lines, role_style, INDICATOR, PADDING_X
from scrollback.scrollbar import Scrollbar, ScrollbarStyle
from scrollback.viewport import ViewportFrame

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
SPINNER_INTERVAL = 0.08
BLOCK_BG = (35, 31, 31)
TEXT_RGB = (237, 237, 237)
DIM_RGB = (150, 146, 146)

_MONO_FALLBACKS = "dejavusansmono,menlo,consolas,liberationmono,monospace"

def load_mono_font(path: Optional[str], size: int) -> pygame.font.Font:
    if path:
        return pygame.font.Font(path, size)
    return pygame.font.SysFont(_MONO_FALLBACKS, size)

class HistoryView:
    """
    Paints a ViewportFrame of ChatMessages onto a character grid.

    The engine decides which items are visible; this only turns them into rows:
    - skip frame.clip_top rows of the first item, stop at the viewport height
    - hug the bottom edge when the frame is bottom-aligned
    - draw the scrollbar column, if the frame has one
    Two columns on the right are always reserved (gap + scrollbar) so the wrap
    width does not depend on whether the scrollbar is showing.
    """
    SCROLLBAR_COLS = 2

    def __init__(self, font: pygame.font.Font, *, indicator: str = INDICATOR, padding_x: int = PADDING_X,
                 scrollbar_style: Optional[ScrollbarStyle] = None, placeholder: str = "",
                 show_timestamp: bool = False):
        self.font = font
        self.indicator = indicator
        self.padding_x = padding_x
        self.show_timestamp = show_timestamp
        self.scrollbar_style = scrollbar_style or ScrollbarStyle()
        self.placeholder = placeholder
        self.cell_w, self.cell_h = font.size("M")
        self._spin_t = 0.0

    # --------- geometry ---------
    def grid(self, rect: pygame.Rect) -> Tuple[int, int]:
        """ (text_cols, rows) available inside `rect`. """
        cols = rect.w // max(1, self.cell_w)
        rows = rect.h // max(1, self.cell_h)
        return max(1, cols - self.SCROLLBAR_COLS), max(0, rows)

    def update(self, dt: float) -> None:
        self._spin_t += dt

    def spinner(self) -> str:
        return SPINNER_FRAMES[int(self._spin_t / SPINNER_INTERVAL) % len(SPINNER_FRAMES)]

    def visible_rows(self, frame: ViewportFrame, cols: int, rows: int) -> List[Tuple[ChatMessage, MessageLine]]:
        out: List[Tuple[ChatMessage, MessageLine]] = []
        for item in frame.items:
            msg: ChatMessage = item.content
            stamp = msg.timestamp if self.show_timestamp else None
            lines = message_lines(msg.content, cols, self.indicator, self.padding_x, stamp)
            out.extend((msg, ln) for ln in lines)
        return out[frame.clip_top:frame.clip_top + rows]

    # --------- drawing ---------
    def draw_into(self, layer: pygame.Surface, rect: pygame.Rect, frame: ViewportFrame) -> None:
        cols, rows = self.grid(rect)
        prev_clip = layer.get_clip()
        layer.set_clip(rect)

        if frame.total_lines == 0 and self.placeholder:
            srf = self.font.render(self.placeholder, True, DIM_RGB)
            layer.blit(srf, srf.get_rect(center=rect.center))
            layer.set_clip(prev_clip)
            return

        lines = self.visible_rows(frame, cols, rows)
        y = rect.y
        if frame.bottom_aligned:
            y = rect.y + (rows - len(lines)) * self.cell_h
        for msg, ln in lines:
            self._draw_line(layer, rect.x, y, cols, msg, ln)
            y += self.cell_h

        if frame.scrollbar is not None:
            x = rect.x + (cols + self.SCROLLBAR_COLS - 1) * self.cell_w
            sb = self.scrollbar_style
            for row, ch in enumerate(Scrollbar.glyphs(frame.scrollbar, sb)):
                color = sb.thumb_rgb if frame.scrollbar.is_thumb(row) else sb.track_rgb
                layer.blit(self.font.render(ch, True, color), (x, rect.y + row * self.cell_h))

        layer.set_clip(prev_clip)

    def _draw_line(self, layer: pygame.Surface, x: int, y: int, cols: int, msg: ChatMessage, ln: MessageLine) -> None:
        if ln.kind == "margin":
            return
        if ln.kind == "stamp":
            # outside the message block, indented three cells
            layer.blit(self.font.render(ln.text, True, DIM_RGB), (x + 3 * self.cell_w, y))
            return
        pygame.draw.rect(layer, BLOCK_BG, pygame.Rect(x, y, cols * self.cell_w, self.cell_h))
        if ln.kind == "pad":
            return
        style = role_style(msg.role)
        tx = x + self.padding_x * self.cell_w
        if ln.kind == "first":
            layer.blit(self.font.render(self.indicator, True, style.indicator_rgb), (tx, y))
        tx += len(self.indicator) * self.cell_w
        text = self.spinner() if msg.loading else ln.text
        if text:
            layer.blit(self.font.render(text, True, DIM_RGB if style.dim_text else TEXT_RGB), (tx, y))
