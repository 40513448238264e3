"""
ANSI control sequences used by the renderer and the demo.
"""

from .utils import write_bytes, write_text

RESET = "\x1b[0m"

# xterm mouse reporting: button events plus SGR extended coordinates
_MOUSE_ON = b"\x1b[?1000h\x1b[?1006h"
_MOUSE_OFF = b"\x1b[?1006l\x1b[?1000l"


def goto_xy(x: int, y: int) -> None:
    """
    Place the cursor.

    Args:
        x: Column, 1 is the left edge
        y: Row, 1 is the top edge
    """
    write_bytes(b"\x1b[%d;%dH" % (int(y), int(x)))


def clear_screen() -> None:
    write_bytes(b"\x1b[2J\x1b[H")


def hide_cursor() -> None:
    write_bytes(b"\x1b[?25l")


def show_cursor() -> None:
    write_bytes(b"\x1b[?25h")


def enable_mouse() -> None:
    """Ask the terminal to report mouse buttons and wheel in SGR form."""
    write_bytes(_MOUSE_ON)


def disable_mouse() -> None:
    write_bytes(_MOUSE_OFF)


def write(text: str) -> None:
    write_text(text)


__all__ = [
    "RESET",
    "goto_xy",
    "clear_screen",
    "hide_cursor",
    "show_cursor",
    "enable_mouse",
    "disable_mouse",
    "write",
]
