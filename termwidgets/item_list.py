"""Filterable list of titled items."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .collection import SelectableCollection
from .constants import WidgetConstants
from .frame import Frame, Span

SELECTED_TITLE_COLOR = (255, 0, 255)
SELECTED_MARKER = "│"


@dataclass
class Item:
    title: str
    subtitle: str = ""

    @property
    def label(self) -> str:
        return self.title


class ItemList:
    """A titled, scrollable list with an interactive filter.

    Pressing the filter key enters filter mode; typed characters then
    narrow the list instead of triggering commands.
    """

    def __init__(self, title: str, items: Iterable[Item],
                 window_size: int = WidgetConstants.LIST_WINDOW_SIZE):
        self.title = title
        self.collection: SelectableCollection[Item] = SelectableCollection(items, window_size)
        self.showing_filter = False

    @property
    def filter(self) -> str:
        return self.collection.filter_text

    @property
    def items(self) -> list[Item]:
        return self.collection.items

    @property
    def filtered_items(self) -> list[Item]:
        return self.collection.view

    def start_filter(self) -> None:
        self.showing_filter = True
        self.collection.set_filter("")

    def cancel_filter(self) -> None:
        self.showing_filter = False
        self.collection.set_filter("")

    def push_filter_char(self, c: str) -> None:
        self.collection.set_filter(self.filter + c)

    def pop_filter_char(self) -> None:
        self.collection.set_filter(self.filter[:-1])

    def next(self) -> None:
        self.collection.next()

    def previous(self) -> None:
        self.collection.previous()

    def get_selected_item(self) -> Optional[Item]:
        return self.collection.selected_item()

    def render(self) -> Frame:
        frame = Frame()
        if self.showing_filter:
            frame.add_text(f"{self.title} | Filter: {self.filter}", bold=True)
        else:
            frame.add_text(self.title, bold=True)
        frame.add_text("")
        if not self.collection.view:
            frame.add_text("  No items.", dim=True)
        for index, item in self.collection.visible():
            if index == self.collection.selected:
                prefix = SELECTED_MARKER
                title = Span(item.title, bold=True, color=SELECTED_TITLE_COLOR)
                subtitle = Span(item.subtitle, italic=True, color=SELECTED_TITLE_COLOR)
            else:
                prefix = " "
                title = Span(item.title)
                subtitle = Span(item.subtitle, dim=True)
            frame.add_text(prefix)
            frame.add_line(Span(prefix + " "), title)
            frame.add_line(Span(prefix + " "), subtitle)
            frame.add_text(prefix)
        if self.showing_filter:
            frame.cursor = (0, len(self.title) + len(" | Filter: ") + len(self.filter))
        return frame
