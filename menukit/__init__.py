"""
menukit - text-mode prompts for installer and boot-menu style consoles.

This library provides:
- A single-line editor with pluggable validation
- A paged viewer for long read-only text
- A paged, numbered selection list and a yes/no confirmation
- An abstract event stream and rendering seam, with a raw-mode terminal
  decoder and an ANSI renderer behind them
"""

__version__ = "0.1.0"

from .signals import ControlSignal, BACK_REQUEST, EXIT_REQUEST
from .events import (
    EVENT_CHARACTER, EVENT_KEY, EVENT_WHEEL,
    KEY_ENTER, KEY_BACKSPACE, KEY_ESC, KEY_INTERRUPT,
    KEY_LEFT, KEY_RIGHT, KEY_UP, KEY_DOWN, KEY_PAGEUP, KEY_PAGEDOWN, KEY_HOME, KEY_END,
    WHEEL_UP, WHEEL_DOWN,
    InputEvent, EventStream, as_event_stream,
    char_event, key_event, wheel_event, parse_key_id, key_events,
)
from .render import Region, Frame, Renderer, AnsiRenderer, RecordingRenderer, NullRenderer, get_renderer, set_renderer
from .paging import PageWindow
from .editor import Validator, EditorState, LineEditor, always_valid, process_input
from .viewer import PagedText, display_result, MORE_SUFFIX, END_SUFFIX
from .menu import Entry, MenuEntry, MenuNavigator, prompt_menu_entry, prompt_confirmation
from .input import RawInput
from .config import MenukitConfig, get_config, configure, load_config
from .utils import count_newlines

__all__ = [
    "ControlSignal", "BACK_REQUEST", "EXIT_REQUEST",
    "EVENT_CHARACTER", "EVENT_KEY", "EVENT_WHEEL",
    "KEY_ENTER", "KEY_BACKSPACE", "KEY_ESC", "KEY_INTERRUPT",
    "KEY_LEFT", "KEY_RIGHT", "KEY_UP", "KEY_DOWN", "KEY_PAGEUP", "KEY_PAGEDOWN", "KEY_HOME", "KEY_END",
    "WHEEL_UP", "WHEEL_DOWN",
    "InputEvent",
    "EventStream",
    "as_event_stream",
    "char_event",
    "key_event",
    "wheel_event",
    "parse_key_id",
    "key_events",
    "Region", "Frame", "Renderer", "AnsiRenderer", "RecordingRenderer", "NullRenderer",
    "get_renderer",
    "set_renderer",
    "PageWindow",
    "Validator",
    "EditorState",
    "LineEditor",
    "always_valid",
    "process_input",
    "PagedText",
    "display_result",
    "MORE_SUFFIX",
    "END_SUFFIX",
    "Entry", "MenuEntry", "MenuNavigator",
    "prompt_menu_entry",
    "prompt_confirmation",
    "RawInput",
    "MenukitConfig",
    "get_config",
    "configure",
    "load_config",
    "count_newlines",
]
