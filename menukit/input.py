"""
Raw mode terminal input decoded into InputEvents.
"""

import os
import re
import select
import sys
from typing import Iterator, List, Optional

from .ansi import disable_mouse, enable_mouse
from .config import get_config
from .events import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_END,
    KEY_ENTER,
    KEY_ESC,
    KEY_HOME,
    KEY_INTERRUPT,
    KEY_LEFT,
    KEY_PAGEDOWN,
    KEY_PAGEUP,
    KEY_RIGHT,
    KEY_UP,
    WHEEL_DOWN,
    WHEEL_UP,
    InputEvent,
    char_event,
    is_printable,
    key_event,
    wheel_event,
)

try:
    import termios  # type: ignore
    import tty  # type: ignore
except ImportError:  # pragma: no cover
    termios = None  # type: ignore
    tty = None  # type: ignore

_MAX_CHARACTER_LATENCY_S = 0.250
_SEQUENCE_BUFFER_SIZE = 32

_CTRL_C = 0x03
_CTRL_D = 0x04

_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)[Mm]$")
_CSI_MODIFIED_RE = re.compile(r"^\x1b\[[0-9;]*([A-Za-z])$")

_FINAL_LETTER_KEYS = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}


def parse_ansi_sequence(seq: str) -> Optional[InputEvent]:
    """
    Parse an escape sequence to an event.

    Args:
        seq: Escape sequence (including ESC)

    Returns:
        Key or wheel event, or None if not recognized
    """
    # SS3 variants (common in some terminals / keypad modes)
    if len(seq) == 3 and seq.startswith("\x1bO"):
        name = _FINAL_LETTER_KEYS.get(seq[2])
        return key_event(name) if name else None

    m = _SGR_MOUSE_RE.match(seq)
    if m:
        # bit 6 marks wheel buttons; press only, releases end in "m"
        button = int(m.group(1))
        if seq.endswith("m") or not (button & 0x40):
            return None
        if button & 0x03 == 0:
            return wheel_event(WHEEL_UP)
        if button & 0x03 == 1:
            return wheel_event(WHEEL_DOWN)
        return None

    # Tilde-terminated CSI sequences
    if seq in ("\x1b[1~", "\x1b[7~"):
        return key_event(KEY_HOME)
    if seq in ("\x1b[4~", "\x1b[8~"):
        return key_event(KEY_END)
    if seq == "\x1b[5~":
        return key_event(KEY_PAGEUP)
    if seq == "\x1b[6~":
        return key_event(KEY_PAGEDOWN)

    # CSI with or without modifiers, e.g. ESC [ 1 ; 2 B
    m = _CSI_MODIFIED_RE.match(seq)
    if m:
        name = _FINAL_LETTER_KEYS.get(m.group(1))
        return key_event(name) if name else None
    return None


def _utf8_length(lead: int) -> int:
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


class RawInput:
    """
    Context manager for raw mode input.

    Example:
        >>> with RawInput() as inp:
        ...     choice, signal = prompt_menu_entry("Boot", "", entries, inp.events())
    """

    def __init__(self, fd: Optional[int] = None, *, mouse: Optional[bool] = None):
        """Initialize raw input handler.

        Args:
            fd: File descriptor to read (defaults to stdin)
            mouse: Request wheel reporting while active (defaults to config)
        """
        cfg = get_config().terminal
        self._fd = sys.stdin.fileno() if fd is None else int(fd)
        self._mouse = cfg.mouse if mouse is None else bool(mouse)
        self._esc_grace_timeout = cfg.escape_timeout_ms / 1000.0
        self._inbuf = bytearray()
        self._eof = False
        self._saved_attrs: Optional[List] = None

    @property
    def eof(self) -> bool:
        return self._eof and not self._inbuf

    def __enter__(self):
        """Enable raw mode."""
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Disable raw mode."""
        self.disable_raw_mode()
        return False

    def enable_raw_mode(self) -> None:
        if termios is None or tty is None or not os.isatty(self._fd):
            return
        if self._saved_attrs is None:
            self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd, when=termios.TCSANOW)
        if self._mouse:
            enable_mouse()

    def disable_raw_mode(self) -> None:
        saved = self._saved_attrs
        if saved is None:
            return
        try:
            if self._mouse:
                disable_mouse()
            termios.tcsetattr(self._fd, termios.TCSANOW, saved)
        finally:
            self._saved_attrs = None

    def _fill_inbuf(self, timeout: Optional[float]) -> bool:
        if self._eof:
            return False
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
        except (OSError, ValueError):
            self._eof = True
            return False
        if not ready:
            return False
        try:
            data = os.read(self._fd, 1024)
        except OSError:
            self._eof = True
            return False
        if not data:
            self._eof = True
            return False
        self._inbuf.extend(data)
        return True

    def _read_byte(self, timeout: Optional[float]) -> Optional[int]:
        if not self._inbuf and not self._fill_inbuf(timeout):
            return None
        b = self._inbuf[0]
        del self._inbuf[0]
        return b

    def _pushback_bytes(self, bs: bytes) -> None:
        self._inbuf[:0] = bs

    def key_pressed(self) -> bool:
        """True if input is available without blocking."""
        if self._inbuf:
            return True
        return self._fill_inbuf(0)

    def _read_escape(self) -> Optional[InputEvent]:
        b = self._read_byte(self._esc_grace_timeout)
        if b is None:
            return key_event(KEY_ESC)
        if b not in (ord("["), ord("O")):
            # Alt+key or a lone ESC followed by typing
            self._pushback_bytes(bytes([b]))
            return key_event(KEY_ESC)

        seq = bytearray(b"\x1b")
        seq.append(b)
        if b == ord("O"):
            nb = self._read_byte(_MAX_CHARACTER_LATENCY_S)
            if nb is not None:
                seq.append(nb)
        else:
            while len(seq) < _SEQUENCE_BUFFER_SIZE:
                nb = self._read_byte(_MAX_CHARACTER_LATENCY_S)
                if nb is None:
                    break
                seq.append(nb)
                # final byte of a CSI sequence
                if 0x40 <= nb <= 0x7E:
                    break
        return parse_ansi_sequence(seq.decode("latin-1"))

    def read_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """
        Read the next event (blocking or with timeout).

        Unrecognized sequences and control characters are skipped.

        Args:
            timeout: Timeout in seconds for the first byte (None = blocking)

        Returns:
            The event, or None on timeout or end of input
        """
        while True:
            b = self._read_byte(timeout)
            if b is None:
                return None

            if b == 0x1B:
                ev = self._read_escape()
            elif b == 0x0D:
                # CRLF from line-mode clients is one Enter
                if self._inbuf[:1] == b"\n":
                    del self._inbuf[0]
                ev = key_event(KEY_ENTER)
            elif b == 0x0A:
                ev = key_event(KEY_ENTER)
            elif b in (0x08, 0x7F):
                ev = key_event(KEY_BACKSPACE)
            elif b in (_CTRL_C, _CTRL_D):
                ev = key_event(KEY_INTERRUPT)
            elif b < 0x80:
                ev = char_event(chr(b)) if is_printable(chr(b)) else None
            else:
                raw = bytearray([b])
                for _ in range(_utf8_length(b) - 1):
                    nb = self._read_byte(_MAX_CHARACTER_LATENCY_S)
                    if nb is None:
                        break
                    if not 0x80 <= nb < 0xC0:
                        # not a continuation byte, it starts the next character
                        self._pushback_bytes(bytes([nb]))
                        break
                    raw.append(nb)
                # stray continuation bytes and cut-off sequences are dropped
                text = raw.decode("utf-8", errors="replace")
                ch = text[0]
                ev = char_event(ch) if ch != "\ufffd" and is_printable(ch) else None

            if ev is not None:
                return ev

    def events(self) -> Iterator[InputEvent]:
        """Yield events until the input reaches end of file."""
        while True:
            ev = self.read_event()
            if ev is None:
                if self.eof:
                    return
                continue
            yield ev
