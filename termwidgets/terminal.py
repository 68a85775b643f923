"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import threading
from typing import Optional

import blessed

from .constants import WidgetConstants
from .frame import Frame, Span

logger = logging.getLogger(__name__)


class TerminalInterface:
    """The display surface and input source shared by all widgets.

    Every write goes through one lock, so output from different threads
    never interleaves inside an escape sequence.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, mouse: bool = True):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.mouse = mouse
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        self._lock = threading.RLock()

    def _write(self, text: str, flush: bool = False) -> None:
        with self._lock:
            print(text, end='', flush=flush)

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        self._write(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear)
        if self.mouse:
            self._write(WidgetConstants.MOUSE_REPORTING_ON, flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # curtsies can fail to initialize without a real tty (CI,
                # pipes); keep drawing and report no input.
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            if self.mouse:
                self._write(WidgetConstants.MOUSE_REPORTING_OFF)
            self._write(self.term.exit_fullscreen + self.term.normal_cursor, flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown must not crash the caller; the terminal may
                # already be gone.
                logger.warning(f"Could not leave raw mode cleanly: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def clear_line(self, y: int):
        """Clear row y."""
        self._write(self.term.move(y, 0) + self.term.clear_eol)

    def clear_region(self, x: int, y: int, width: int, height: int):
        """Blank a width x height rectangle whose top-left corner is (x, y)."""
        blank = " " * max(0, width)
        with self._lock:
            for row in range(max(0, height)):
                self._write(self.term.move(y + row, x) + blank)

    def move_cursor(self, y: int, x: int):
        """Move the visible cursor to (y, x) without drawing anything."""
        self._write(self.term.move(y, x) + self.term.normal_cursor, flush=True)

    def hide_cursor(self):
        self._write(self.term.hide_cursor, flush=True)

    def show_cursor(self):
        self._write(self.term.normal_cursor, flush=True)

    def _compose_span(self, span: Span) -> str:
        """Wrap one span's text in the attributes it asks for."""
        attrs = []
        if span.bold:
            attrs.append(self.term.bold)
        if span.italic:
            attrs.append(self.term.italic)
        if span.dim:
            attrs.append(self.term.dim)
        if span.reverse:
            attrs.append(self.term.reverse)
        if span.color is not None:
            attrs.append(self.term.color_rgb(*span.color))
        if not attrs:
            return span.text
        return ''.join(attrs) + span.text + self.term.normal

    def compose_line(self, spans: list[Span]) -> str:
        return ''.join(self._compose_span(span) for span in spans)

    def draw_frame(self, frame: Frame, x: int = 0, y: int = 0,
                   clear_width: Optional[int] = None) -> None:
        """Draw a frame with its top-left corner at (x, y).

        Each row is cleared to ``clear_width`` columns (default: the frame
        width) before drawing so shorter rows leave no stale text. The
        cursor is shown at the frame's cursor position, or hidden.
        """
        width = clear_width if clear_width is not None else frame.width
        out = []
        for row, spans in enumerate(frame.lines):
            out.append(self.term.move(y + row, x) + " " * width)
            out.append(self.term.move(y + row, x) + self.compose_line(spans))
        if frame.cursor is None:
            out.append(self.term.hide_cursor)
        else:
            cursor_row, cursor_col = frame.cursor
            out.append(self.term.move(y + cursor_row, x + cursor_col) + self.term.normal_cursor)
        self._write(''.join(out), flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None when nothing arrived.
        """
        if self._curtsies_input is not None:
            if timeout is None:
                evt = next(self._curtsies_input)  # blocks
                return str(evt)
            t = 0.0 if timeout == 0 else float(timeout)
            r, _, _ = select.select([sys.stdin], [], [], t)
            if not r:
                return None
            evt = next(self._curtsies_input)
            return str(evt)
        return None

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
