"""Bordered table with a clamped (non-wrapping) row cursor."""

from typing import Optional, Sequence

from .collection import SelectableCollection
from .constants import WidgetConstants
from .errors import ConfigurationError
from .frame import Frame, Span

SELECTED_ROW_COLOR = (135, 95, 215)


def calculate_column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]],
                            padding: int) -> list[int]:
    """Width of each column: its longest cell or header plus padding on both sides."""
    widths = [len(header) + 2 * padding for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell) + 2 * padding)
    return widths


class Table:
    """Rows of cells under a header line.

    Browsing is paginated: moving past the first or last row does nothing,
    and page up/down jump a full screen of rows.

    Raises:
        ConfigurationError: If a row does not have one cell per header, or
            padding/visible_lines are out of range.
    """

    def __init__(self, headers: Sequence[str], rows: Sequence[Sequence[str]],
                 selected_row: int = 0, padding: int = WidgetConstants.TABLE_CELL_PADDING,
                 visible_lines: int = WidgetConstants.TABLE_VISIBLE_ROWS):
        if not headers:
            raise ConfigurationError("A table needs at least one header")
        if padding < 0:
            raise ConfigurationError(f"padding cannot be negative, got {padding}")
        for number, row in enumerate(rows):
            if len(row) != len(headers):
                raise ConfigurationError(
                    f"Row {number} has {len(row)} cells, expected {len(headers)}"
                )
        self.headers = list(headers)
        self.padding = padding
        self.collection: SelectableCollection[list[str]] = SelectableCollection(
            (list(row) for row in rows), visible_lines,
            label=lambda row: " ".join(row), circular=False,
        )
        self.collection.select(selected_row)
        self.column_widths = calculate_column_widths(self.headers, self.rows, padding)

    @property
    def rows(self) -> list[list[str]]:
        return self.collection.items

    @property
    def visible_lines(self) -> int:
        return self.collection.window_size

    @property
    def selected_row(self) -> Optional[int]:
        return self.collection.selected

    @property
    def scroll_offset(self) -> int:
        return self.collection.scroll_offset

    @property
    def table_width(self) -> int:
        """Outer width including the vertical borders."""
        return sum(self.column_widths) + 2

    def move_cursor_down(self) -> None:
        self.collection.next()

    def move_cursor_up(self) -> None:
        self.collection.previous()

    def page_down(self) -> None:
        self.collection.page_down()

    def page_up(self) -> None:
        self.collection.page_up()

    def selected_values(self) -> Optional[list[str]]:
        return self.collection.selected_item()

    def _format_cells(self, cells: Sequence[str], center: bool) -> str:
        pad = " " * self.padding
        parts = []
        for cell, width in zip(cells, self.column_widths):
            inner = width - 2 * self.padding
            text = cell.center(inner) if center else cell.ljust(inner)
            parts.append(pad + text + pad)
        return "".join(parts)

    def render(self) -> Frame:
        inner = self.table_width - 2
        frame = Frame()
        frame.add_text("┌" + "─" * inner + "┐")
        frame.add_text("│" + self._format_cells(self.headers, center=False) + "│", bold=True)
        frame.add_text("│" + "─" * inner + "│")
        visible = self.collection.visible()
        for index, row in visible:
            body = self._format_cells(row, center=True)
            if index == self.collection.selected:
                frame.add_line(Span("│"), Span(body, reverse=True, color=SELECTED_ROW_COLOR), Span("│"))
            else:
                frame.add_line(Span("│"), Span(body), Span("│"))
        for _ in range(self.visible_lines - len(visible)):
            frame.add_text("│" + " " * inner + "│")
        frame.add_text("└" + "─" * inner + "┘")
        return frame
