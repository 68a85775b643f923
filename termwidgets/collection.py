"""Filterable, selectable collections with a scroll window.

:class:`SelectableCollection` is the state behind the list, menu and table
widgets. It keeps three things consistent with each other: the filtered
view, the selected index into that view, and the scroll offset of the
window showing part of the view.

Invariant, after every public call::

    selected is None  <=>  view is empty
    otherwise  scroll_offset <= selected < scroll_offset + window_size
"""

from typing import Callable, Generic, Iterable, Optional, TypeVar

from .errors import ConfigurationError
from .scroll import adjust_offset, visible_range

T = TypeVar("T")


def default_label(item) -> str:
    """Label of an item: its ``label`` attribute if it has one, else ``str(item)``."""
    label = getattr(item, "label", None)
    if label is None:
        return str(item)
    return str(label)


class SelectableCollection(Generic[T]):
    """Ordered items with a case-insensitive filter and a selection cursor.

    Args:
        items: Items in display order.
        window_size: Number of items visible at once (at least 1).
        label: Function returning the text an item is filtered on.
        circular: If True, next/previous wrap around the ends (list, menu).
            If False they stop at the first and last item (table).
    """

    def __init__(self, items: Iterable[T], window_size: int,
                 label: Callable[[T], str] = default_label, circular: bool = True):
        if window_size < 1:
            raise ConfigurationError(f"window_size must be at least 1, got {window_size}")
        self.items: list[T] = list(items)
        self.window_size = window_size
        self.label = label
        self.circular = circular
        self.filter_text = ""
        self.view: list[T] = list(self.items)
        self.selected: Optional[int] = None
        self.scroll_offset = 0
        self._reset_selection()

    def __len__(self) -> int:
        return len(self.view)

    def _reset_selection(self) -> None:
        self.selected = 0 if self.view else None
        self.scroll_offset = 0

    def _follow_selection(self) -> None:
        self.scroll_offset = adjust_offset(
            self.selected, len(self.view), self.window_size, self.scroll_offset
        )

    def _matches(self, item: T, needle: str) -> bool:
        return needle in self.label(item).lower()

    def set_filter(self, text: str) -> None:
        """Show only items whose label contains ``text`` (case-insensitive).

        The selection moves back to the first match, or to None when
        nothing matches.
        """
        self.filter_text = text
        if text:
            needle = text.lower()
            self.view = [item for item in self.items if self._matches(item, needle)]
        else:
            self.view = list(self.items)
        self._reset_selection()

    def set_items(self, items: Iterable[T]) -> None:
        """Replace the items, keeping the current filter."""
        self.items = list(items)
        self.set_filter(self.filter_text)

    def set_window_size(self, window_size: int) -> None:
        if window_size < 1:
            raise ConfigurationError(f"window_size must be at least 1, got {window_size}")
        self.window_size = window_size
        self._follow_selection()

    def next(self) -> None:
        if self.selected is None:
            return
        count = len(self.view)
        if self.circular:
            self.selected = (self.selected + 1) % count
        else:
            self.selected = min(self.selected + 1, count - 1)
        self._follow_selection()

    def previous(self) -> None:
        if self.selected is None:
            return
        count = len(self.view)
        if self.circular:
            self.selected = (self.selected - 1) % count
        else:
            self.selected = max(self.selected - 1, 0)
        self._follow_selection()

    def page_down(self) -> None:
        """Move the selection a full window down, stopping at the last item."""
        if self.selected is None:
            return
        self.selected = min(self.selected + self.window_size, len(self.view) - 1)
        self._follow_selection()

    def page_up(self) -> None:
        if self.selected is None:
            return
        self.selected = max(self.selected - self.window_size, 0)
        self._follow_selection()

    def select(self, index: int) -> None:
        """Select ``index`` in the view, clamped to the view bounds."""
        if not self.view:
            return
        self.selected = max(0, min(index, len(self.view) - 1))
        self._follow_selection()

    def selected_item(self) -> Optional[T]:
        if self.selected is None:
            return None
        return self.view[self.selected]

    def visible(self) -> list[tuple[int, T]]:
        """(view_index, item) pairs inside the scroll window."""
        rows = visible_range(self.scroll_offset, self.window_size, len(self.view))
        return [(i, self.view[i]) for i in rows]
