"""
Paged viewer for long, read-only text.

PagedText keeps the viewport arithmetic; display_result() runs the
interactive loop and reports what the user was looking at when they left.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .config import get_config
from .events import (
    KEY_DOWN,
    KEY_END,
    KEY_ESC,
    KEY_HOME,
    KEY_INTERRUPT,
    KEY_PAGEDOWN,
    KEY_PAGEUP,
    KEY_UP,
    WHEEL_DOWN,
    WHEEL_UP,
    EventSource,
    as_event_stream,
)
from .render import Frame, Region, Renderer, default_region, resolve_renderer
from .signals import EXIT_REQUEST, ControlSignal

logger = logging.getLogger(__name__)

MORE_SUFFIX = "(More)"
END_SUFFIX = "(End of message)"


class PagedText:
    """
    Viewport of ``height`` lines over a fixed list of lines.

    The top offset stays within ``0 .. max(0, len(lines) - height)``.
    """

    def __init__(self, lines: Sequence[str], height: int):
        if height <= 0:
            raise ValueError(f"page height must be positive, got {height}")
        self._lines: List[str] = [str(line) for line in lines]
        self.height = height
        self._view_top = 0

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def offset(self) -> int:
        return self._view_top

    @property
    def max_top(self) -> int:
        return max(0, len(self._lines) - self.height)

    def scroll_up(self, lines: int = 1) -> None:
        self._view_top = max(0, self._view_top - lines)

    def scroll_down(self, lines: int = 1) -> None:
        self._view_top = min(self.max_top, self._view_top + lines)

    def page_up(self) -> None:
        self.scroll_up(self.height)

    def page_down(self) -> None:
        self.scroll_down(self.height)

    def scroll_to_top(self) -> None:
        self._view_top = 0

    def scroll_to_bottom(self) -> None:
        self._view_top = self.max_top

    def visible(self) -> List[str]:
        return self._lines[self._view_top : self._view_top + self.height]

    @property
    def has_more(self) -> bool:
        return self._view_top + self.height < len(self._lines)

    @property
    def suffix(self) -> str:
        return MORE_SUFFIX if self.has_more else END_SUFFIX

    def result(self) -> str:
        """Visible lines and the More / End of message marker."""
        return "\n".join(self.visible()) + "\n\n" + self.suffix

    def status(self) -> str:
        total = len(self._lines)
        if total == 0:
            return END_SUFFIX
        first = self._view_top + 1
        last = min(total, self._view_top + self.height)
        return f"Lines {first}-{last} of {total}  {self.suffix}"


def display_result(
    lines: Union[str, Sequence[str]],
    events: EventSource,
    *,
    height: Optional[int] = None,
    title: str = "",
    region: Optional[Region] = None,
    renderer: Optional[Renderer] = None,
) -> Tuple[str, Optional[ControlSignal]]:
    """
    Let the user page through lines until they press Escape (or q).

    Args:
        lines: Text lines, or one string split on newlines
        events: Event stream, queue, or iterable of events
        height: Lines per page (defaults to the configured result height)
        title: Caption for the viewer frame
        region: Where to draw (defaults to the configured origin)
        renderer: Overrides the default renderer

    Returns:
        (visible lines + "\\n\\n" + "(More)" or "(End of message)", None),
        or ("", EXIT_REQUEST) on the interrupt key or a closed stream
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    page_height = get_config().layout.result_height if height is None else height
    pager = PagedText(lines, page_height)
    stream = as_event_stream(events)
    out = resolve_renderer(renderer)
    area = default_region(page_height) if region is None else region

    def render() -> None:
        out.draw(Frame(region=area, title=title, body=tuple(pager.visible()), footer=pager.status()))

    render()
    while True:
        ev = stream.next_event()

        if ev is None or ev.is_key(KEY_INTERRUPT):
            logger.debug("viewer: exit requested")
            return "", EXIT_REQUEST

        if ev.is_key(KEY_ESC) or (ev.is_character and ev.value == "q"):
            return pager.result(), None

        if ev.is_key(KEY_PAGEDOWN) or ev.is_wheel(WHEEL_DOWN):
            pager.page_down()
        elif ev.is_key(KEY_PAGEUP) or ev.is_wheel(WHEEL_UP):
            pager.page_up()
        elif ev.is_key(KEY_DOWN):
            pager.scroll_down()
        elif ev.is_key(KEY_UP):
            pager.scroll_up()
        elif ev.is_key(KEY_HOME):
            pager.scroll_to_top()
        elif ev.is_key(KEY_END):
            pager.scroll_to_bottom()
        else:
            continue
        render()
