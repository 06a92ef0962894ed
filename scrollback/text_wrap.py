from __future__ import annotations
from typing import List

# --- Public API ---
def wrap(text: str, max_width: int) -> List[str]:
    """
    Soft-wrap on spaces, with a hard-wrap fallback for words longer than the line.
    - Explicit newlines always start a new line; blank paragraphs stay as "" lines.
    - Widths are counted in characters (one terminal cell per char).
    - max_width <= 0 is treated as 1 so the result is always defined.
    """
    width = max(1, int(max_width))
    out: List[str] = []
    for paragraph in (text or "").split("\n"):
        if not paragraph:
            out.append("")
            continue
        out.extend(_wrap_paragraph(paragraph, width))
    return out

def height(text: str, max_width: int) -> int:
    """ Number of display lines `text` occupies at `max_width`. Never 0. """
    return len(wrap(text, max_width))

# --- Internals ---
def _wrap_paragraph(paragraph: str, width: int) -> List[str]:
    lines: List[str] = []
    remaining = paragraph
    while remaining:
        if len(remaining) <= width:
            lines.append(remaining)
            break
        brk = _break_point(remaining, width)
        lines.append(remaining[:brk])
        remaining = remaining[brk:].lstrip()
    return lines

def _break_point(s: str, width: int) -> int:
    # last space at or before `width`; a space at 0 would give an empty line
    space = s.rfind(" ", 0, width + 1)
    return space if space > 0 else width
