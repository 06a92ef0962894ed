from __future__ import annotations
from typing import Optional

import pygame

# Named keys, Ink-style: arrows by name, letters as typed.
_LINE_UP = ("up", "k")
_LINE_DOWN = ("down", "j")

_PYGAME_KEYS = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_k: "k",
    pygame.K_j: "j",
    pygame.K_u: "u",
    pygame.K_d: "d",
}

class ScrollKeymap:
    """
    Maps key presses to scroll deltas (in display lines).

    Rules:
      - Up / k      -> -1
      - Down / j    -> +1
      - Ctrl-U      -> -floor(viewport_h / 2)
      - Ctrl-D      -> +floor(viewport_h / 2)
    Anything else returns None so the caller can route the key elsewhere.
    vi keys can be switched off, e.g. while a text field is taking letters.
    """
    def __init__(self, *, vi_keys: bool = True) -> None:
        self.vi_keys = vi_keys

    # --- public API ---------------------------------------------------------
    def delta_for(self, key: str, ctrl: bool, viewport_h: int) -> Optional[int]:
        key = (key or "").lower()
        half = max(0, int(viewport_h)) // 2
        # line keys win over the modifier: Ctrl-Up still moves one line
        if key in _LINE_UP and (key == "up" or self.vi_keys):
            return -1
        if key in _LINE_DOWN and (key == "down" or self.vi_keys):
            return 1
        if ctrl:
            if key == "u":
                return -half
            if key == "d":
                return half
        return None

    def delta_for_event(self, e: pygame.event.Event, viewport_h: int) -> Optional[int]:
        """ Same rules for a pygame KEYDOWN event; other event types give None. """
        if e.type != pygame.KEYDOWN:
            return None
        return self.delta_for(_PYGAME_KEYS.get(e.key, ""), self._ctrl(e), viewport_h)

    # --- helpers ------------------------------------------------------------
    @staticmethod
    def _ctrl(e: pygame.event.Event) -> bool:
        return bool(getattr(e, "mod", 0) & pygame.KMOD_CTRL)
