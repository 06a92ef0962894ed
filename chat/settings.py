from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from scrollback.scrollbar import ScrollbarStyle

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).resolve().parent / "config" / "defaults.yaml"

class SettingsError(ValueError):
    """ Raised for an unreadable settings file or a value of the wrong type. """

@dataclass
class WindowCfg:
    width: int = 960
    height: int = 640
    title: str = "scrollback"
    bg_rgb: tuple[int, int, int] = (18, 16, 16)
    fps: int = 60

@dataclass
class FontCfg:
    path: Optional[str] = None      # None -> pygame's default monospace lookup
    size: int = 18

@dataclass
class ViewportCfg:
    show_scrollbar: bool = True
    scrollbar: ScrollbarStyle = field(default_factory=ScrollbarStyle)

@dataclass
class InputCfg:
    vi_keys: bool = True
    enable_mouse_scroll: bool = False   # wheel events are ignored either way

@dataclass
class ChatCfg:
    input_area_height: int = 3          # input line + model line + padding
    indicator: str = "▌ "
    padding_x: int = 1
    placeholder: str = "Start a conversation..."
    reply_delay: float = 0.6            # seconds before the mock assistant answers
    show_timestamp: bool = False        # HH:MM line under each message

@dataclass
class AppCfg:
    window: WindowCfg = field(default_factory=WindowCfg)
    font: FontCfg = field(default_factory=FontCfg)
    viewport: ViewportCfg = field(default_factory=ViewportCfg)
    input: InputCfg = field(default_factory=InputCfg)
    chat: ChatCfg = field(default_factory=ChatCfg)
    log_level: str = "INFO"


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def _typed(d: dict, path: str, default: Any, conv: Callable[[Any], Any]):
    raw = _get(d, path, default)
    try:
        return conv(raw)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"bad value for '{path}': {raw!r} ({e})") from e

def _rgb(v: Any) -> tuple[int, int, int]:
    r, g, b = (int(c) for c in v)
    return (r, g, b)

def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    raise TypeError("expected true/false")

def read_yaml(path: Union[str, Path]) -> dict:
    p = Path(path)
    if not p.exists():
        logger.warning("settings file %s not found, using defaults", p)
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"could not parse {p}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"{p}: top level must be a mapping")
    return data

def load_settings(path: Union[str, Path, None] = None) -> AppCfg:
    data = read_yaml(path or DEFAULTS_PATH)
    base = AppCfg()
    sb = base.viewport.scrollbar

    return AppCfg(
        window=WindowCfg(
            width=_typed(data, "window.width", base.window.width, int),
            height=_typed(data, "window.height", base.window.height, int),
            title=_typed(data, "window.title", base.window.title, str),
            bg_rgb=_typed(data, "window.bg_rgb", base.window.bg_rgb, _rgb),
            fps=_typed(data, "window.fps", base.window.fps, int),
        ),
        font=FontCfg(
            path=_get(data, "font.path", base.font.path),
            size=_typed(data, "font.size", base.font.size, int),
        ),
        viewport=ViewportCfg(
            show_scrollbar=_typed(data, "viewport.show_scrollbar", base.viewport.show_scrollbar, _bool),
            scrollbar=sb.derive(
                min_thumb_size=_typed(data, "viewport.scrollbar.min_thumb_size", sb.min_thumb_size, int),
                thumb_char=_typed(data, "viewport.scrollbar.thumb_char", sb.thumb_char, str),
                track_char=_typed(data, "viewport.scrollbar.track_char", sb.track_char, str),
                thumb_rgb=_typed(data, "viewport.scrollbar.thumb_rgb", sb.thumb_rgb, _rgb),
                track_rgb=_typed(data, "viewport.scrollbar.track_rgb", sb.track_rgb, _rgb),
            ),
        ),
        input=InputCfg(
            vi_keys=_typed(data, "input.vi_keys", base.input.vi_keys, _bool),
            enable_mouse_scroll=_typed(data, "input.enable_mouse_scroll", base.input.enable_mouse_scroll, _bool),
        ),
        chat=ChatCfg(
            input_area_height=_typed(data, "chat.input_area_height", base.chat.input_area_height, int),
            indicator=_typed(data, "chat.indicator", base.chat.indicator, str),
            padding_x=_typed(data, "chat.padding_x", base.chat.padding_x, int),
            placeholder=_typed(data, "chat.placeholder", base.chat.placeholder, str),
            reply_delay=_typed(data, "chat.reply_delay", base.chat.reply_delay, float),
            show_timestamp=_typed(data, "chat.show_timestamp", base.chat.show_timestamp, _bool),
        ),
        log_level=_typed(data, "logging.level", base.log_level, lambda v: str(v).upper()),
    )
