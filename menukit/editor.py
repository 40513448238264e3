"""
Single-line input with validation on submit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .events import (
    KEY_BACKSPACE,
    KEY_ENTER,
    KEY_ESC,
    KEY_INTERRUPT,
    EventSource,
    InputEvent,
    as_event_stream,
    is_printable,
)
from .render import Frame, Region, Renderer, resolve_renderer
from .signals import BACK_REQUEST, EXIT_REQUEST, ControlSignal

logger = logging.getLogger(__name__)

# (candidate) -> (normalized value, message, ok)
Validator = Callable[[str], Tuple[str, str, bool]]

# (value, message, signal)
EditResult = Tuple[str, str, Optional[ControlSignal]]


def always_valid(candidate: str) -> Tuple[str, str, bool]:
    return candidate, "", True


@dataclass
class EditorState:
    buffer: List[str] = field(default_factory=list)
    error_message: str = ""
    finished: bool = False

    @property
    def text(self) -> str:
        return "".join(self.buffer)


class LineEditor:
    """
    Accumulates one line of text from input events.

    Characters append, Backspace pops, Enter submits the buffer to the
    validator. A rejected submission keeps the buffer and shows the
    validator's message under it. Escape and the interrupt key end the edit
    with a control signal.

    handle() processes a single event so another prompt can drive the
    editor; process_input() is the blocking loop for standalone use.
    """

    def __init__(
        self,
        title: str,
        region: Region,
        validator: Validator = always_valid,
        renderer: Optional[Renderer] = None,
        max_length: Optional[int] = None,
    ):
        self.title = title
        self.region = region
        self.validator = validator
        self.renderer = resolve_renderer(renderer)
        self.max_length = max_length
        self.state = EditorState()

    @property
    def text(self) -> str:
        return self.state.text

    def frame(self) -> Frame:
        text = self.state.text
        # keep the tail visible once the line is wider than the region
        overflow = max(0, len(text) - (self.region.width - 1))
        shown = text[overflow:]
        return Frame(
            region=self.region,
            title=self.title,
            body=(shown,),
            footer=self.state.error_message,
            cursor=(len(shown), 0),
        )

    def render(self) -> None:
        self.renderer.draw(self.frame())

    def _finish(self, value: str, message: str, signal: Optional[ControlSignal]) -> EditResult:
        self.state.finished = True
        return value, message, signal

    def handle(self, event: Optional[InputEvent]) -> Optional[EditResult]:
        """
        Apply one event.

        Returns:
            (value, message, signal) once the edit is over, None while it continues.
            A None event (closed stream) ends the edit with EXIT_REQUEST.
        """
        if self.state.finished:
            raise RuntimeError("line editor already finished")

        if event is None:
            logger.debug("%s: event stream closed", self.title)
            return self._finish("", "", EXIT_REQUEST)

        if event.is_key(KEY_ESC):
            logger.debug("%s: back requested", self.title)
            return self._finish("", "", BACK_REQUEST)

        if event.is_key(KEY_INTERRUPT):
            logger.debug("%s: exit requested", self.title)
            return self._finish("", "", EXIT_REQUEST)

        if event.is_key(KEY_ENTER):
            candidate = self.state.text
            value, message, ok = self.validator(candidate)
            if ok:
                return self._finish(value, message, None)
            logger.debug("%s: rejected %r: %s", self.title, candidate, message)
            self.state.error_message = message
            self.render()
            return None

        if event.is_key(KEY_BACKSPACE):
            if self.state.buffer:
                self.state.buffer.pop()
            self.render()
            return None

        if event.is_character and is_printable(event.value):
            if self.max_length is None or len(self.state.buffer) < self.max_length:
                self.state.buffer.append(event.value)
                self.state.error_message = ""
            self.render()
            return None

        return None


def process_input(
    title: str,
    region: Region,
    validator: Validator,
    events: EventSource,
    *,
    renderer: Optional[Renderer] = None,
    max_length: Optional[int] = None,
) -> EditResult:
    """
    Read one validated line.

    Args:
        title: Prompt caption
        region: Where the input line (and its error line) is drawn
        validator: Called with the buffer on Enter
        events: Event stream, queue, or iterable of events
        renderer: Overrides the default renderer
        max_length: Optional cap on the buffer length

    Returns:
        (value, message, None) on a valid submission, or
        ("", "", BACK_REQUEST / EXIT_REQUEST)
    """
    stream = as_event_stream(events)
    editor = LineEditor(title, region, validator, renderer=renderer, max_length=max_length)
    editor.render()
    while True:
        result = editor.handle(stream.next_event())
        if result is not None:
            return result
