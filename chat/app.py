from __future__ import annotations

import logging
import sys
from typing import Optional

import pygame

from chat.history import ChatHistory, MockAssistant
from chat.history_view import HistoryView, load_mono_font, DIM_RGB, TEXT_RGB
from chat.settings import AppCfg, load_settings
from scrollback.keybindings import ScrollKeymap
from scrollback.viewport import Viewport

logger = logging.getLogger(__name__)


class ChatApp:
    """
    Window shell around one chat Viewport.
    It keeps global concerns (window init, fps, resize) and routes input:
    scroll keys to the viewport, everything else to the input line.
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )
        pygame.key.set_repeat(300, 40)

        self.clock = pygame.time.Clock()
        self.running = True

        font = load_mono_font(cfg.font.path, cfg.font.size)
        self.view = HistoryView(
            font,
            indicator=cfg.chat.indicator,
            padding_x=cfg.chat.padding_x,
            scrollbar_style=cfg.viewport.scrollbar,
            placeholder=cfg.chat.placeholder,
            show_timestamp=cfg.chat.show_timestamp,
        )
        self.history = ChatHistory(cfg.chat.indicator, cfg.chat.padding_x, cfg.chat.show_timestamp)
        self.assistant = MockAssistant(self.history, cfg.chat.reply_delay)
        self.keymap = ScrollKeymap(vi_keys=cfg.input.vi_keys)
        self.input_text = ""

        cols, rows = self.view.grid(self._history_rect())
        self.viewport = Viewport(
            (),
            rows,
            width=cols,
            measure=self.history.measure,
            show_scrollbar=cfg.viewport.show_scrollbar,
            scrollbar_style=cfg.viewport.scrollbar,
        )
        if cfg.input.enable_mouse_scroll:
            logger.info("mouse wheel scrolling is not supported; ignoring input.enable_mouse_scroll")

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(self.cfg.window.fps) / 1000.0

            for e in pygame.event.get():
                self.handle_event(e)
                if not self.running:
                    break

            if self.assistant.update(dt):
                # a reply's text (and so its height) changed in place
                self.viewport.set_items(self.history.messages)
            self.view.update(dt)
            self._draw()
            pygame.display.flip()

        pygame.quit()

    # ------------------------------------------------------------------ #
    # Input
    # ------------------------------------------------------------------ #
    def handle_event(self, e: pygame.event.Event) -> None:
        if e.type == pygame.QUIT:
            self.running = False
        elif e.type == pygame.VIDEORESIZE:
            self._resize_to(e.w, e.h)
        elif e.type == pygame.KEYDOWN:
            self._on_key(e)
        elif e.type == pygame.TEXTINPUT:
            self.input_text += e.text

    def _on_key(self, e: pygame.event.Event) -> None:
        if e.key == pygame.K_ESCAPE:
            self.running = False
            return
        if e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self.submit(self.input_text)
            self.input_text = ""
            return
        if e.key == pygame.K_BACKSPACE:
            self.input_text = self.input_text[:-1]
            return

        # j/k scroll only while the input line is empty; the letter is still typed
        self.keymap.vi_keys = self.cfg.input.vi_keys and not self.input_text
        delta = self.keymap.delta_for_event(e, self.viewport.viewport_h)
        if delta is not None:
            self.viewport.scroll_by(delta)

    def submit(self, text: str) -> None:
        msg = self.history.send(text)
        if msg is None:
            return
        logger.info("user message %s (%d chars)", msg.id, len(msg.content))
        reply = self.assistant.ask(msg.content)
        self.viewport.on_items_appended([msg, reply])
        self.viewport.jump_to_bottom_trigger(self.history.jump_trigger)

    # ------------------------------------------------------------------ #
    # Drawing
    # ------------------------------------------------------------------ #
    def _history_rect(self) -> pygame.Rect:
        w, h = self.screen.get_size()
        input_h = self.cfg.chat.input_area_height * self.view.cell_h
        return pygame.Rect(0, 0, w, max(self.view.cell_h, h - input_h))

    def _draw(self) -> None:
        self.screen.fill(self.cfg.window.bg_rgb)
        rect = self._history_rect()
        self.view.draw_into(self.screen, rect, self.viewport.frame())

        font, ch = self.view.font, self.view.cell_h
        y = rect.bottom + ch // 2
        prompt = font.render("> " + self.input_text + "_", True, TEXT_RGB)
        self.screen.blit(prompt, (self.view.cell_w, y))
        status = "mock-assistant" + ("  (thinking)" if self.history.is_loading else "")
        self.screen.blit(font.render(status, True, DIM_RGB), (self.view.cell_w, y + ch))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface, then re-fit the viewport to the new grid."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        cols, rows = self.view.grid(self._history_rect())
        if self.viewport.on_resize(rows, cols):
            logger.debug("viewport resized to %dx%d cells", cols, rows)


def main(argv: Optional[list] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    cfg = load_settings(argv[0] if argv else None)
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ChatApp(cfg).run()


if __name__ == "__main__":
    main()
