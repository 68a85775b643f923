"""Menu with a highlight cursor and toggleable check marks."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .collection import SelectableCollection
from .constants import WidgetConstants
from .frame import Frame, Span

TITLE_COLOR = (255, 135, 255)
HIGHLIGHT_SYMBOL = "> "
CHECK_MARK = "✓"


@dataclass
class MenuItem:
    name: str
    checked: bool = False

    @property
    def label(self) -> str:
        return self.name


class Menu:
    """Title, subtitle and a circular list of options."""

    def __init__(self, title: str, subtitle: str, items: Iterable[str],
                 window_size: int = WidgetConstants.MENU_WINDOW_SIZE):
        self.title = title
        self.subtitle = subtitle
        self.collection: SelectableCollection[MenuItem] = SelectableCollection(
            (MenuItem(name) for name in items), window_size
        )

    @property
    def items(self) -> list[MenuItem]:
        return self.collection.items

    @property
    def selected(self) -> Optional[int]:
        return self.collection.selected

    def up(self) -> None:
        self.collection.previous()

    def down(self) -> None:
        self.collection.next()

    def toggle_selection(self) -> None:
        item = self.collection.selected_item()
        if item is not None:
            item.checked = not item.checked

    def selected_name(self) -> Optional[str]:
        item = self.collection.selected_item()
        return item.name if item is not None else None

    def checked_names(self) -> list[str]:
        return [item.name for item in self.items if item.checked]

    def render(self) -> Frame:
        frame = Frame()
        frame.add_text(self.title, bold=True, color=TITLE_COLOR)
        frame.add_text(self.subtitle, bold=True, dim=True)
        frame.add_text("")
        for index, item in self.collection.visible():
            mark = f"{CHECK_MARK} " if item.checked else "  "
            if index == self.collection.selected:
                frame.add_line(Span(HIGHLIGHT_SYMBOL + mark + item.name, bold=True))
            else:
                frame.add_line(Span(" " * len(HIGHLIGHT_SYMBOL) + mark + item.name))
        return frame
