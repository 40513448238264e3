"""
Input events and the ordered stream prompts read them from.

Events are produced by an external source (the terminal decoder in
``menukit.input``, a test, or another thread feeding a queue) and consumed
one at a time by the prompt loops.
"""

from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Union

EVENT_CHARACTER = "EVENT_CHARACTER"
EVENT_KEY = "EVENT_KEY"
EVENT_WHEEL = "EVENT_WHEEL"

KEY_ENTER = "KEY_ENTER"
KEY_BACKSPACE = "KEY_BACKSPACE"
KEY_ESC = "KEY_ESC"
KEY_INTERRUPT = "KEY_INTERRUPT"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_PAGEUP = "KEY_PAGEUP"
KEY_PAGEDOWN = "KEY_PAGEDOWN"
KEY_HOME = "KEY_HOME"
KEY_END = "KEY_END"

NAMED_KEYS = (
    KEY_ENTER,
    KEY_BACKSPACE,
    KEY_ESC,
    KEY_INTERRUPT,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    KEY_DOWN,
    KEY_PAGEUP,
    KEY_PAGEDOWN,
    KEY_HOME,
    KEY_END,
)

WHEEL_UP = "WHEEL_UP"
WHEEL_DOWN = "WHEEL_DOWN"


@dataclass(frozen=True)
class InputEvent:
    event_type: str
    value: str

    @property
    def is_character(self) -> bool:
        return self.event_type == EVENT_CHARACTER

    def is_key(self, *names: str) -> bool:
        return self.event_type == EVENT_KEY and self.value in names

    def is_wheel(self, direction: Optional[str] = None) -> bool:
        if self.event_type != EVENT_WHEEL:
            return False
        return direction is None or self.value == direction


def is_printable(ch: str) -> bool:
    """
    Check if character is printable.

    Args:
        ch: Character to check

    Returns:
        True if printable
    """
    if len(ch) != 1:
        return False
    code = ord(ch)
    return 32 <= code <= 126 or code >= 160


def char_event(ch: str) -> InputEvent:
    if len(ch) != 1:
        raise ValueError(f"character event needs exactly one character, got {ch!r}")
    return InputEvent(EVENT_CHARACTER, ch)


def key_event(name: str) -> InputEvent:
    if name not in NAMED_KEYS:
        raise ValueError(f"unknown key name: {name!r}")
    return InputEvent(EVENT_KEY, name)


def wheel_event(direction: str) -> InputEvent:
    if direction not in (WHEEL_UP, WHEEL_DOWN):
        raise ValueError(f"unknown wheel direction: {direction!r}")
    return InputEvent(EVENT_WHEEL, direction)


# termui-style key ids, lower-cased
_KEY_IDS: Dict[str, InputEvent] = {
    "<enter>": key_event(KEY_ENTER),
    "<backspace>": key_event(KEY_BACKSPACE),
    "<c-8>": key_event(KEY_BACKSPACE),
    "<escape>": key_event(KEY_ESC),
    "<c-d>": key_event(KEY_INTERRUPT),
    "<c-c>": key_event(KEY_INTERRUPT),
    "<left>": key_event(KEY_LEFT),
    "<right>": key_event(KEY_RIGHT),
    "<up>": key_event(KEY_UP),
    "<down>": key_event(KEY_DOWN),
    "<pageup>": key_event(KEY_PAGEUP),
    "<pagedown>": key_event(KEY_PAGEDOWN),
    "<home>": key_event(KEY_HOME),
    "<end>": key_event(KEY_END),
    "<mousewheelup>": wheel_event(WHEEL_UP),
    "<mousewheeldown>": wheel_event(WHEEL_DOWN),
    "<space>": char_event(" "),
}


def parse_key_id(key_id: str) -> InputEvent:
    """
    Translate a key id such as ``"a"``, ``"<Enter>"`` or ``"<C-d>"`` to an event.

    Ids in angle brackets are matched case-insensitively; any other single
    character is a character event.

    Raises:
        ValueError: for unknown or empty ids
    """
    if len(key_id) == 1:
        return char_event(key_id)
    ev = _KEY_IDS.get(key_id.lower())
    if ev is None:
        raise ValueError(f"unknown key id: {key_id!r}")
    return ev


def key_events(key_ids: Iterable[str]) -> List[InputEvent]:
    return [parse_key_id(k) for k in key_ids]


class EventStream:
    """
    Blocking, ordered source of input events.

    Wraps either a ``queue.Queue`` (``None`` put on the queue closes the
    stream) or any iterable of events. Each event is delivered exactly once.

    Example:
        >>> stream = EventStream(key_events(["4", "2", "<Enter>"]))
        >>> stream.next_event()
        InputEvent(event_type='EVENT_CHARACTER', value='4')
    """

    def __init__(self, source: Union["queue.Queue[Optional[InputEvent]]", Iterable[InputEvent]]):
        self._queue: Optional["queue.Queue[Optional[InputEvent]]"] = None
        self._iter: Optional[Iterator[InputEvent]] = None
        if isinstance(source, queue.Queue):
            self._queue = source
        else:
            try:
                self._iter = iter(source)
            except TypeError as e:
                raise TypeError(f"event source must be a queue or an iterable, got {type(source).__name__}") from e
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def next_event(self) -> Optional[InputEvent]:
        """Block until the next event; None once the stream is closed."""
        if self._closed:
            return None
        if self._queue is not None:
            ev = self._queue.get()
        else:
            ev = next(self._iter, None)  # type: ignore[arg-type]
        if ev is None:
            self._closed = True
        return ev

    def __iter__(self) -> Iterator[InputEvent]:
        while True:
            ev = self.next_event()
            if ev is None:
                return
            yield ev


EventSource = Union[EventStream, "queue.Queue[Optional[InputEvent]]", Iterable[InputEvent]]


def as_event_stream(events: EventSource) -> EventStream:
    if isinstance(events, EventStream):
        return events
    return EventStream(events)
