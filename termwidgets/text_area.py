"""Multi-line text editing: the buffer model and the TextArea widget."""

from dataclasses import dataclass
from typing import Optional

from .constants import WidgetConstants
from .errors import ConfigurationError
from .frame import Frame, Span
from .scroll import adjust_offset, visible_range

LINE_BREAKS = ("\n", "\r")


@dataclass
class CursorPosition:
    line_index: int = 0
    column: int = 0


class TextEditBuffer:
    """Editable lines of text with a single cursor and a scroll window.

    Every operation is total: requests that cannot be honoured (moving past
    the buffer edges, deleting at the very start) leave the buffer unchanged.
    After each call the cursor is inside the buffer and its line is inside
    the visible window.
    """

    lines: list[str]
    cursor: CursorPosition

    def __init__(self, visible_height: int, lines: Optional[list[str]] = None):
        if visible_height < 1:
            raise ConfigurationError(f"visible_height must be at least 1, got {visible_height}")
        self.visible_height = visible_height
        self.lines = list(lines) if lines else [""]
        self.cursor = CursorPosition()
        self.scroll_offset = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str) -> None:
        """Replace the whole buffer and put the cursor at the end."""
        self.lines = text.split("\n") if text else [""]
        self.cursor.line_index = len(self.lines) - 1
        self.cursor.column = len(self.lines[-1])
        self._ensure_cursor_within_bounds()
        self._adjust_scroll()

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.line_index]

    def _cursor_is_valid(self) -> bool:
        return (0 <= self.cursor.line_index < len(self.lines)
                and 0 <= self.cursor.column <= len(self.lines[self.cursor.line_index]))

    def _ensure_cursor_within_bounds(self) -> None:
        if not self.lines:
            self.lines = [""]
        self.cursor.line_index = max(0, min(self.cursor.line_index, len(self.lines) - 1))
        self.cursor.column = max(0, min(self.cursor.column, len(self.current_line)))

    def _adjust_scroll(self) -> None:
        self.scroll_offset = adjust_offset(
            self.cursor.line_index, len(self.lines), self.visible_height, self.scroll_offset
        )

    def _after_change(self) -> None:
        self._ensure_cursor_within_bounds()
        self._adjust_scroll()

    # --- editing ---

    def insert_char(self, c: str) -> None:
        if c in LINE_BREAKS:
            self.split_line()
            return
        if not self._cursor_is_valid():
            return
        line = self.current_line
        col = self.cursor.column
        self.lines[self.cursor.line_index] = line[:col] + c + line[col:]
        self.cursor.column += 1
        self._after_change()

    def insert_text(self, text: str) -> None:
        for c in text:
            self.insert_char(c)

    def split_line(self) -> None:
        """Move the text at and after the cursor onto a new line below."""
        if not self._cursor_is_valid():
            return
        idx = self.cursor.line_index
        line = self.lines[idx]
        self.lines[idx] = line[:self.cursor.column]
        self.lines.insert(idx + 1, line[self.cursor.column:])
        self.cursor.line_index = idx + 1
        self.cursor.column = 0
        self._after_change()

    def delete_char(self) -> None:
        """Backspace: remove the character left of the cursor or join lines."""
        if not self._cursor_is_valid():
            return
        idx = self.cursor.line_index
        col = self.cursor.column
        if col > 0:
            line = self.lines[idx]
            self.lines[idx] = line[:col - 1] + line[col:]
            self.cursor.column = col - 1
        elif idx > 0:
            self._join_with_previous_line()
        self._after_change()

    def delete_forward(self) -> None:
        """Delete key: remove the character under the cursor or pull up the next line."""
        if not self._cursor_is_valid():
            return
        idx = self.cursor.line_index
        col = self.cursor.column
        line = self.lines[idx]
        if col < len(line):
            self.lines[idx] = line[:col] + line[col + 1:]
        elif idx + 1 < len(self.lines):
            self.lines[idx] = line + self.lines.pop(idx + 1)
        self._after_change()

    def _join_with_previous_line(self) -> None:
        idx = self.cursor.line_index
        current = self.lines.pop(idx)
        previous_length = len(self.lines[idx - 1])
        self.lines[idx - 1] += current
        self.cursor.line_index = idx - 1
        self.cursor.column = previous_length

    # --- movement ---

    def move_left(self) -> None:
        if self.cursor.column > 0:
            self.cursor.column -= 1
        elif self.cursor.line_index > 0:
            self.cursor.line_index -= 1
            self.cursor.column = len(self.current_line)
        self._after_change()

    def move_right(self) -> None:
        if self.cursor.column < len(self.current_line):
            self.cursor.column += 1
        elif self.cursor.line_index + 1 < len(self.lines):
            self.cursor.line_index += 1
            self.cursor.column = 0
        self._after_change()

    def move_up(self) -> None:
        if self.cursor.line_index > 0:
            self.cursor.line_index -= 1
        self._after_change()

    def move_down(self) -> None:
        if self.cursor.line_index + 1 < len(self.lines):
            self.cursor.line_index += 1
        self._after_change()

    def move_home(self) -> None:
        self.cursor.column = 0
        self._after_change()

    def move_end(self) -> None:
        self.cursor.column = len(self.current_line)
        self._after_change()

    def visible_lines(self) -> list[tuple[int, str]]:
        """(line_index, text) pairs inside the scroll window."""
        rows = visible_range(self.scroll_offset, self.visible_height, len(self.lines))
        return [(i, self.lines[i]) for i in rows]


class TextArea:
    """Labelled multi-line editor with line numbers and helper text."""

    def __init__(self, label: str, helper: Optional[str] = None,
                 visible_lines: int = WidgetConstants.TEXT_AREA_VISIBLE_LINES):
        self.label = label
        self.helper = helper
        self.buffer = TextEditBuffer(visible_lines)

    @property
    def value(self) -> str:
        return self.buffer.text

    def render(self) -> Frame:
        """Label, a blank row, numbered lines, then the helper.

        Rows past the end of the buffer are drawn as empty numbered rows so
        the widget keeps a fixed height.
        """
        frame = Frame()
        frame.add_text(self.label, bold=True)
        frame.add_text("")
        gutter = WidgetConstants.LINE_NUMBER_GUTTER
        offset = self.buffer.scroll_offset
        for row in range(self.buffer.visible_height):
            line_idx = offset + row
            text = self.buffer.lines[line_idx] if line_idx < len(self.buffer.lines) else ""
            frame.add_line(Span(f"|{line_idx + 1:3} ", dim=True), Span(text))
        if self.helper:
            frame.add_text("")
            frame.add_text(self.helper, dim=True)
        cursor = self.buffer.cursor
        frame.cursor = (2 + cursor.line_index - offset, gutter + cursor.column)
        return frame
