"""
Paged selection list and yes/no confirmation.

The list shows one page of entries at a time, numbered from 0 on every
page. Paging keys and the mouse wheel move between pages; everything else
goes to an embedded line editor where the user types the number of an
entry on the visible page.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .config import get_config
from .editor import LineEditor
from .events import (
    KEY_DOWN,
    KEY_END,
    KEY_HOME,
    KEY_LEFT,
    KEY_PAGEDOWN,
    KEY_PAGEUP,
    KEY_RIGHT,
    KEY_UP,
    WHEEL_DOWN,
    WHEEL_UP,
    EventSource,
    InputEvent,
    as_event_stream,
)
from .paging import PageWindow
from .render import Frame, Region, Renderer, default_region, resolve_renderer
from .signals import ControlSignal
from .utils import count_newlines

logger = logging.getLogger(__name__)

NOT_A_NUMBER = "Input is not a valid entry number."
INPUT_TITLE = "Entry number"

_ENTRY_NUMBER_RE = re.compile(r"^[0-9]+$")


@runtime_checkable
class Entry(Protocol):
    """Anything that can be listed in a menu."""

    def label(self) -> str:
        ...

    def is_default(self) -> bool:
        ...


@dataclass
class MenuEntry:
    """
    Plain menu entry.

    Attributes:
        text: Label shown in the list
        default: Marks the entry as the default choice
        value: Caller data carried along with the entry
    """

    text: str
    default: bool = False
    value: Any = None

    def label(self) -> str:
        return self.text

    def is_default(self) -> bool:
        return self.default


def _is_previous_page(ev: InputEvent) -> bool:
    return ev.is_key(KEY_LEFT, KEY_UP, KEY_PAGEUP) or ev.is_wheel(WHEEL_UP)


def _is_next_page(ev: InputEvent) -> bool:
    return ev.is_key(KEY_RIGHT, KEY_DOWN, KEY_PAGEDOWN) or ev.is_wheel(WHEEL_DOWN)


class MenuNavigator:
    """
    State of one prompt_menu_entry() call: the page window and the editor
    collecting the entry number.
    """

    def __init__(
        self,
        title: str,
        description: str,
        entries: Sequence[Entry],
        *,
        page_size: Optional[int] = None,
        region: Optional[Region] = None,
        renderer: Optional[Renderer] = None,
    ):
        cfg = get_config()
        self.title = title
        self.description = description
        self.entries = entries
        self.window = PageWindow(size=cfg.layout.page_size if page_size is None else page_size, total=len(entries))
        self.renderer = resolve_renderer(renderer)
        self._marker = cfg.ui.theme.default_marker
        self._description_rows = description.split("\n") if description else []

        # description, a blank separator row, then one row per entry
        list_height = self.window.size
        if description:
            list_height += count_newlines(description) + 2
        if region is None:
            region = default_region(list_height)
        else:
            region = Region(region.x, region.y, region.width, list_height)
        self.region = region
        self.editor = LineEditor(
            INPUT_TITLE,
            region.below(1),
            self.validate,
            renderer=self.renderer,
        )

    def validate(self, candidate: str) -> Tuple[str, str, bool]:
        """Accept a page-relative entry number addressing the visible page."""
        if not _ENTRY_NUMBER_RE.match(candidate):
            return "", NOT_A_NUMBER, False
        digits = candidate.lstrip("0") or "0"
        # more digits than the page size has cannot address an entry
        position = int(digits) if len(digits) <= len(str(self.window.size)) else self.window.size
        if not self.window.contains(position):
            if self.window.count == 0:
                return "", "There are no entries to choose from.", False
            return "", f"Input is out of range. Choose 0-{self.window.count - 1}.", False
        return str(position), "", True

    def entry_row(self, position: int, entry: Entry) -> str:
        marker = f" {self._marker}" if entry.is_default() and self._marker else ""
        return f"[{position}] {entry.label()}{marker}"

    def footer(self) -> str:
        if self.window.page_count <= 1:
            return ""
        return f"Page {self.window.index + 1}/{self.window.page_count}  (PgUp/PgDn to change page)"

    def render_list(self) -> None:
        rows: List[str] = list(self._description_rows)
        if rows:
            rows.append("")
        for position, entry in enumerate(self.window.visible(self.entries)):
            rows.append(self.entry_row(position, entry))
        self.renderer.draw(Frame(region=self.region, title=self.title, body=tuple(rows), footer=self.footer()))

    def render(self) -> None:
        self.render_list()
        self.editor.render()

    def change_page(self, ev: InputEvent) -> bool:
        """Apply a paging event; False if ev is not one."""
        if _is_previous_page(ev):
            moved = self.window.previous()
        elif _is_next_page(ev):
            moved = self.window.next()
        elif ev.is_key(KEY_HOME):
            moved = self.window.first()
        elif ev.is_key(KEY_END):
            moved = self.window.last()
        else:
            return False
        if moved:
            logger.debug("%s: page %d/%d", self.title, self.window.index + 1, self.window.page_count)
            self.render()
        return True

    def run(self, events: EventSource) -> Tuple[Optional[Entry], Optional[ControlSignal]]:
        stream = as_event_stream(events)
        self.render()
        while True:
            ev = stream.next_event()
            if ev is not None and self.change_page(ev):
                continue
            result = self.editor.handle(ev)
            if result is None:
                continue
            value, _message, signal = result
            if signal is not None:
                return None, signal
            return self.entries[self.window.absolute(int(value))], None


def prompt_menu_entry(
    title: str,
    description: str,
    entries: Sequence[Entry],
    events: EventSource,
    *,
    page_size: Optional[int] = None,
    region: Optional[Region] = None,
    renderer: Optional[Renderer] = None,
) -> Tuple[Optional[Entry], Optional[ControlSignal]]:
    """
    Let the user pick one of entries by its number on the visible page.

    Args:
        title: Menu caption
        description: Text shown above the entries (may span lines)
        entries: Items to choose from; only label() and is_default() are used
        events: Event stream, queue, or iterable of events
        page_size: Entries per page (defaults to the configured page size)
        region: Top-left corner and width of the menu
        renderer: Overrides the default renderer

    Returns:
        (entry, None) for a choice, (None, BACK_REQUEST) on Escape, or
        (None, EXIT_REQUEST) on the interrupt key or a closed stream
    """
    navigator = MenuNavigator(title, description, entries, page_size=page_size, region=region, renderer=renderer)
    return navigator.run(events)


def prompt_confirmation(
    question: str,
    events: EventSource,
    *,
    region: Optional[Region] = None,
    renderer: Optional[Renderer] = None,
) -> Tuple[bool, Optional[ControlSignal]]:
    """
    Ask a yes/no question as a two-entry menu: 0 is Yes, 1 is No.

    Returns:
        (True, None) for Yes, (False, None) for No, or (False, signal) when
        the user backs out or exits
    """
    yes = MenuEntry("Yes")
    no = MenuEntry("No")
    chosen, signal = prompt_menu_entry(question, "", [yes, no], events, page_size=2, region=region, renderer=renderer)
    if signal is not None:
        return False, signal
    return chosen is yes, None
