"""
Rendering seam between the prompt loops and the screen.

Prompts describe what to show as a Frame and hand it to a Renderer after
every state change. The loops never write to the terminal themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .ansi import RESET, goto_xy, hide_cursor, show_cursor, write
from .boxes import box_lines
from .config import MenukitConfig, get_config
from .utils import pad_string, truncate_string


@dataclass(frozen=True)
class Region:
    """Screen rectangle, 1-indexed.

    width and height count body cells only; a drawn frame adds a footer row
    and, when boxed, one border cell on every side.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"region must be at least 1x1, got {self.width}x{self.height}")

    @property
    def screen_height(self) -> int:
        """Rows a boxed frame occupies: borders, body and footer."""
        return self.height + 3

    def below(self, height: int, gap: int = 0) -> "Region":
        """Region of the same width starting under this one's boxed frame."""
        return Region(self.x, self.y + self.screen_height + gap, self.width, height)


@dataclass(frozen=True)
class Frame:
    """
    One "draw this text at this region" effect.

    Attributes:
        region: Where to draw
        title: Caption shown in the top border
        body: Content rows, top to bottom
        footer: Status or error line shown under the body (empty = none)
        cursor: (col, row) inside the content area, 0-indexed; None hides it
    """

    region: Region
    title: str
    body: Tuple[str, ...] = ()
    footer: str = ""
    cursor: Optional[Tuple[int, int]] = None

    def rows(self) -> List[str]:
        """Body fitted to the region height, then the footer row (blank when unset)."""
        body = list(self.body[: self.region.height])
        return body + [""] * (self.region.height - len(body)) + [self.footer]


@runtime_checkable
class Renderer(Protocol):
    def draw(self, frame: Frame) -> None:
        ...


class NullRenderer:
    """Renderer that discards every frame."""

    def draw(self, frame: Frame) -> None:
        return None


@dataclass
class RecordingRenderer:
    """Keeps every frame it is given, oldest first."""

    frames: List[Frame] = field(default_factory=list)

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)

    def last(self, title: Optional[str] = None) -> Optional[Frame]:
        for frame in reversed(self.frames):
            if title is None or frame.title == title:
                return frame
        return None

    def clear(self) -> None:
        self.frames.clear()


class AnsiRenderer:
    """
    Draws frames with ANSI cursor addressing, boxed unless the theme's
    border style is "none".
    """

    def __init__(self, config: Optional[MenukitConfig] = None):
        self._config = config

    @property
    def config(self) -> MenukitConfig:
        return get_config() if self._config is None else self._config

    def draw(self, frame: Frame) -> None:
        theme = self.config.ui.theme
        colors = theme.colors
        region = frame.region
        rows = frame.rows()
        footer_row = len(rows) - 1

        if theme.border_style == "none":
            text_width = region.width
            for i, row in enumerate(rows):
                color = colors.warning if i == footer_row else colors.text
                goto_xy(region.x, region.y + i)
                write(f"{color}{pad_string(truncate_string(row, text_width, ellipsis=''), text_width)}{RESET}")
            origin = (region.x, region.y)
        else:
            lines = box_lines(region.width + 2, rows, style=theme.border_style, title=frame.title)
            for i, line in enumerate(lines):
                if i == 0:
                    color = colors.title
                elif i == len(lines) - 1:
                    color = colors.frame_border
                elif i - 1 == footer_row:
                    color = colors.warning
                else:
                    color = colors.text
                goto_xy(region.x, region.y + i)
                write(f"{color}{line}{RESET}")
            origin = (region.x + 1, region.y + 1)

        if frame.cursor is None:
            hide_cursor()
            return
        col = max(0, min(frame.cursor[0], region.width - 1))
        row = max(0, min(frame.cursor[1], region.height - 1))
        goto_xy(origin[0] + col, origin[1] + row)
        show_cursor()


_current_renderer: Optional[Renderer] = None


def get_renderer() -> Renderer:
    """Process-wide default renderer, an AnsiRenderer until set_renderer() is called."""
    global _current_renderer
    if _current_renderer is None:
        _current_renderer = AnsiRenderer()
    return _current_renderer


def set_renderer(renderer: Optional[Renderer]) -> None:
    global _current_renderer
    _current_renderer = renderer


def resolve_renderer(renderer: Optional[Renderer]) -> Renderer:
    return get_renderer() if renderer is None else renderer


def default_region(height: int, *, row: int = 0, config: Optional[MenukitConfig] = None) -> Region:
    """Region at the configured origin and width, moved down by row screen lines."""
    layout = (get_config() if config is None else config).layout
    return Region(layout.x, layout.y + row, layout.width, max(1, height))
