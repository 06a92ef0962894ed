from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from chat.messages import ChatMessage, message_height, INDICATOR, PADDING_X

logger = logging.getLogger(__name__)

class ChatHistory:
    """
    Owns the conversation and the jump-to-bottom counter.

    The counter goes up only when the user sends something. Assistant replies are
    appended without touching it, so a reader scrolled into history stays put.
    """
    def __init__(self, indicator: str = INDICATOR, padding_x: int = PADDING_X, show_timestamp: bool = False):
        self.indicator = indicator
        self.padding_x = padding_x
        self.show_timestamp = show_timestamp
        self._messages: List[ChatMessage] = []
        self.jump_trigger: int = 0

    # ---------- authoring ----------
    def send(self, content: str) -> Optional[ChatMessage]:
        """ Append a user message. Blank input is ignored and returns None. """
        text = (content or "").strip()
        if not text:
            return None
        msg = ChatMessage("user", text)
        self._messages.append(msg)
        self.jump_trigger += 1
        return msg

    def receive(self, content: str, role: str = "assistant") -> ChatMessage:
        msg = ChatMessage(role, content)
        self._messages.append(msg)
        return msg

    def begin_reply(self) -> ChatMessage:
        """ Placeholder assistant message, shown as a spinner until completed. """
        msg = ChatMessage("assistant", "", loading=True)
        self._messages.append(msg)
        return msg

    def complete_reply(self, msg_id: str, content: str) -> bool:
        for i, m in enumerate(self._messages):
            if m.id == msg_id:
                self._messages[i] = m.with_content(content)
                return True
        logger.warning("reply for unknown message %s dropped", msg_id)
        return False

    # ---------- queries ----------
    @property
    def messages(self) -> List[ChatMessage]:
        return self._messages

    @property
    def is_loading(self) -> bool:
        return bool(self._messages) and self._messages[-1].loading

    def __len__(self) -> int:
        return len(self._messages)

    def measure(self, msg: ChatMessage, width: int) -> int:
        """ Viewport measure hook: display height of `msg` at `width` columns. """
        return message_height(msg.content, width, self.indicator, self.padding_x, self.show_timestamp)


@dataclass
class _PendingReply:
    msg_id: str
    prompt: str
    wait: float

_CANNED = (
    "Sure. Here is what I found for \"{prompt}\".",
    "Let me think about \"{prompt}\" for a moment.\n\nFirst, the short answer: it depends on the width "
    "of your terminal, because every line here is wrapped to fit before it is scrolled.",
    "Noted: {prompt}",
)

class MockAssistant:
    """
    Canned replies on a timer, so the history grows while the user reads.
    No network, no model; replies rotate through a fixed set.
    """
    def __init__(self, history: ChatHistory, delay: float = 0.6):
        self.history = history
        self.delay = max(0.0, float(delay))
        self._pending: Deque[_PendingReply] = deque()
        self._turn = 0

    def ask(self, prompt: str) -> ChatMessage:
        msg = self.history.begin_reply()
        self._pending.append(_PendingReply(msg.id, prompt, self.delay))
        return msg

    def update(self, dt: float) -> bool:
        """ Advance timers; returns True if a reply was completed this tick. """
        if not self._pending:
            return False
        head = self._pending[0]
        head.wait -= max(0.0, dt)
        if head.wait > 0.0:
            return False
        self._pending.popleft()
        text = _CANNED[self._turn % len(_CANNED)].format(prompt=head.prompt)
        self._turn += 1
        return self.history.complete_reply(head.msg_id, text)
