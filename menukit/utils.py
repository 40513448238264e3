"""
Terminal output and plain-text measuring helpers.
"""

import os
import re
import sys
from typing import Optional

_CSI_RE = re.compile(r'\x1b\[[0-9;?]*[a-zA-Z]')

# when set, raw output goes here instead of stdout
_output_fd: Optional[int] = None


def set_output_fd(fd: Optional[int]) -> None:
    global _output_fd
    _output_fd = fd


def write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        if written <= 0:
            raise OSError(f"short write on fd {fd}")
        view = view[written:]


def write_bytes(data: bytes) -> None:
    """
    Send raw bytes to the terminal.

    Args:
        data: Encoded output, usually text plus escape codes
    """
    if _output_fd is not None:
        write_all(_output_fd, data)
        return
    out = sys.stdout.buffer
    out.write(data)
    out.flush()


def write_text(text: str) -> None:
    write_bytes(text.encode('utf-8', errors='replace'))


def strip_ansi(text: str) -> str:
    """Drop CSI escape sequences (colours, cursor moves) from text."""
    return _CSI_RE.sub('', text)


def visible_length(text: str) -> int:
    return len(strip_ansi(text))


def pad_string(text: str, width: int, justify: str = "left", fillchar: str = " ") -> str:
    """
    Pad text to width terminal cells; colour codes take no room.

    Args:
        text: Possibly coloured text
        width: Cells to fill
        justify: "left", "right" or "center"
        fillchar: Padding character

    Returns:
        text unchanged when it is already width cells or wider
    """
    missing = width - visible_length(text)
    if missing <= 0:
        return text
    if justify == "right":
        return fillchar * missing + text
    if justify == "center":
        before = missing // 2
        return fillchar * before + text + fillchar * (missing - before)
    return text + fillchar * missing


def truncate_string(text: str, width: int, ellipsis: str = "...") -> str:
    """
    Cut plain text down to width characters.

    The ellipsis replaces the tail when it fits; otherwise the text is simply
    cut.
    """
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if len(ellipsis) >= width:
        return text[:width]
    return text[: width - len(ellipsis)] + ellipsis


def count_newlines(text: str) -> int:
    """Number of line feeds in text."""
    return text.count("\n")
