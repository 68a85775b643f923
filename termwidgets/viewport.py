"""Word-wrapped, scrollable document viewport."""

from typing import Optional

from .constants import WidgetConstants
from .errors import ConfigurationError
from .frame import Frame
from .scroll import max_offset, visible_range


def wrap_paragraph(paragraph: str, width: int) -> list[str]:
    """Greedy word wrap of a single paragraph.

    Words are separated by runs of whitespace. A line takes whole words
    while they fit; a word longer than ``width`` is broken into
    ``width``-sized pieces and the last piece starts the next line.
    """
    words = paragraph.split()
    if not words:
        return [""]

    lines: list[str] = []
    current_line: Optional[str] = None

    for word in words:
        if current_line is not None:
            if len(current_line) + 1 + len(word) <= width:
                current_line += " " + word
                continue
            lines.append(current_line)
            current_line = None
        # First word on the line, breaking it if it can never fit
        while len(word) > width:
            lines.append(word[:width])
            word = word[width:]
        current_line = word

    assert current_line is not None
    lines.append(current_line)
    return lines


def wrap_text(content: str, width: int) -> list[str]:
    """Wrap ``content`` to ``width`` columns, keeping hard line breaks."""
    if width < 1:
        raise ConfigurationError(f"wrap width must be at least 1, got {width}")
    lines: list[str] = []
    for paragraph in content.split("\n"):
        lines.extend(wrap_paragraph(paragraph, width))
    return lines


class ContentScroller:
    """Scroll state over the wrapped lines of a document.

    The wrapped lines are cached. Changing ``content`` or ``wrap_width``
    only marks the cache stale; it is rebuilt (and the offset re-clamped)
    the next time the lines or the offset are read.
    """

    def __init__(self, content: str, wrap_width: int, viewport_height: int):
        if wrap_width < 1:
            raise ConfigurationError(f"wrap_width must be at least 1, got {wrap_width}")
        if viewport_height < 1:
            raise ConfigurationError(f"viewport_height must be at least 1, got {viewport_height}")
        self._content = content
        self._wrap_width = wrap_width
        self.viewport_height = viewport_height
        self._scroll_offset = 0
        self._wrapped: Optional[list[str]] = None

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str) -> None:
        self._content = value
        self._wrapped = None

    @property
    def wrap_width(self) -> int:
        return self._wrap_width

    @wrap_width.setter
    def wrap_width(self, value: int) -> None:
        if value < 1:
            raise ConfigurationError(f"wrap_width must be at least 1, got {value}")
        self._wrap_width = value
        self._wrapped = None

    @property
    def wrapped_lines(self) -> list[str]:
        if self._wrapped is None:
            self._wrapped = wrap_text(self._content, self._wrap_width)
            self._scroll_offset = self._clamp(self._scroll_offset)
        return self._wrapped

    @property
    def max_offset(self) -> int:
        return max_offset(len(self.wrapped_lines), self.viewport_height)

    @property
    def scroll_offset(self) -> int:
        self.wrapped_lines  # refresh a stale cache before reporting the offset
        return self._scroll_offset

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, self.max_offset))

    def scroll_down(self) -> None:
        self._scroll_offset = self._clamp(self.scroll_offset + 1)

    def scroll_up(self) -> None:
        self._scroll_offset = self._clamp(self.scroll_offset - 1)

    def page_down(self) -> None:
        self._scroll_offset = self._clamp(self.scroll_offset + self.viewport_height)

    def page_up(self) -> None:
        self._scroll_offset = self._clamp(self.scroll_offset - self.viewport_height)

    def scroll_to_top(self) -> None:
        self._scroll_offset = 0

    def scroll_to_bottom(self) -> None:
        self._scroll_offset = self.max_offset

    def progress_percent(self) -> float:
        """How far down the document the window is, from 0 to 100.

        A document that fits entirely in the window reports 0.
        """
        scrollable = len(self.wrapped_lines) - self.viewport_height
        if scrollable <= 0:
            return 0.0
        percent = 100.0 * self.scroll_offset / scrollable
        return max(0.0, min(100.0, percent))

    def visible_lines(self) -> list[str]:
        lines = self.wrapped_lines
        return [lines[i] for i in visible_range(self.scroll_offset, self.viewport_height, len(lines))]


class Viewport:
    """Document pager: header box, wrapped content and a progress footer."""

    def __init__(self, header: str, content: str, height: int, width: int,
                 padding: int = WidgetConstants.VIEWPORT_PADDING):
        if width < 1:
            raise ConfigurationError(f"width must be at least 1, got {width}")
        if padding < 0:
            raise ConfigurationError(f"padding cannot be negative, got {padding}")
        wrap_width = width - 2 * padding
        if wrap_width < 1:
            raise ConfigurationError(
                f"width {width} leaves no room for text with padding {padding}"
            )
        self.header = header
        self.width = width
        self.padding = padding
        self.scroller = ContentScroller(content, wrap_width, height)

    @property
    def height(self) -> int:
        return self.scroller.viewport_height

    def set_content(self, content: str) -> None:
        self.scroller.content = content

    def scroll_up(self) -> None:
        self.scroller.scroll_up()

    def scroll_down(self) -> None:
        self.scroller.scroll_down()

    def page_up(self) -> None:
        self.scroller.page_up()

    def page_down(self) -> None:
        self.scroller.page_down()

    def scroll_to_top(self) -> None:
        self.scroller.scroll_to_top()

    def scroll_to_bottom(self) -> None:
        self.scroller.scroll_to_bottom()

    def footer_text(self) -> str:
        return f"{'─' * max(0, self.width - 2)} {self.scroller.progress_percent():.2f}%"

    def render(self) -> Frame:
        frame = Frame()
        frame.add_text("┌" + "─" * (len(self.header) + 1) + "┐")
        frame.add_text(f"│ {self.header}│", bold=True)
        frame.add_text("└" + "─" * (len(self.header) + 1) + "┘")
        frame.add_text("")
        pad = " " * self.padding
        visible = self.scroller.visible_lines()
        for line in visible:
            frame.add_text((pad + line).ljust(self.width))
        for _ in range(self.height - len(visible)):
            frame.add_text(" " * self.width)
        frame.add_text("")
        frame.add_text(self.footer_text(), dim=True)
        return frame
