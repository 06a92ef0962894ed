from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from scrollback import text_wrap

INDICATOR = "▌ "
PADDING_X = 1

_ids = itertools.count(1)

def _next_id() -> str:
    return f"msg-{next(_ids)}"

@dataclass(frozen=True)
class ChatMessage:
    role: str                                   # "user" | "assistant" | "system"
    content: str
    id: str = field(default_factory=_next_id)
    timestamp: float = field(default_factory=time.time)
    loading: bool = False                       # assistant reply still being produced

    def with_content(self, content: str) -> "ChatMessage":
        return replace(self, content=content, loading=False)

@dataclass(frozen=True)
class RoleStyle:
    indicator_rgb: tuple[int, int, int]
    dim_text: bool

ROLE_STYLES: Dict[str, RoleStyle] = {
    "user": RoleStyle((0, 255, 255), dim_text=False),
    "assistant": RoleStyle((255, 0, 255), dim_text=True),
    "system": RoleStyle((255, 255, 0), dim_text=True),
}

def role_style(role: str) -> RoleStyle:
    return ROLE_STYLES.get(role, ROLE_STYLES["system"])

def format_timestamp(ts: float) -> str:
    return time.strftime("%H:%M", time.localtime(ts))

@dataclass(frozen=True)
class MessageLine:
    kind: str       # "pad" | "first" | "body" | "stamp" | "margin"
    text: str = ""

def content_width(width: int, indicator: str = INDICATOR, padding_x: int = PADDING_X) -> int:
    return max(1, width - padding_x * 2 - len(indicator))

def message_lines(content: str, width: int, indicator: str = INDICATOR,
                  padding_x: int = PADDING_X, timestamp: Optional[float] = None) -> List[MessageLine]:
    """
    Display lines of one message block at `width` columns:
    a blank padding line, the wrapped content (indicator on the first line),
    another padding line, an HH:MM line when `timestamp` is given,
    then one blank margin line separating messages.
    """
    wrapped = text_wrap.wrap(content, content_width(width, indicator, padding_x))
    out = [MessageLine("pad")]
    for i, line in enumerate(wrapped):
        out.append(MessageLine("first" if i == 0 else "body", line))
    out.append(MessageLine("pad"))
    if timestamp is not None:
        out.append(MessageLine("stamp", format_timestamp(timestamp)))
    out.append(MessageLine("margin"))
    return out

def message_height(content: str, width: int, indicator: str = INDICATOR,
                   padding_x: int = PADDING_X, show_timestamp: bool = False) -> int:
    # wrapped content + top/bottom padding + margin (+ timestamp)
    body = text_wrap.height(content, content_width(width, indicator, padding_x))
    return body + 3 + (1 if show_timestamp else 0)
