"""Test the item list, menu and table widgets."""

import pytest
from termwidgets.errors import ConfigurationError
from termwidgets.item_list import Item, ItemList
from termwidgets.menu import Menu
from termwidgets.table import Table, calculate_column_widths


def create_list():
    return ItemList("Groceries", [
        Item("Pocky", "Expensive"),
        Item("Ginger", "Exquisite"),
        Item("Coke", "Cheap"),
        Item("Sprite", "Cheap"),
    ], window_size=2)


def create_table(**kwargs):
    headers = ["Rank", "City", "Country"]
    rows = [[str(n), f"City{n}", "Somewhere"] for n in range(1, 11)]
    return Table(headers, rows, **kwargs)


# --- ItemList ---

def test_list_filter_editing():
    lst = create_list()
    lst.start_filter()
    assert lst.showing_filter
    for c in "spr":
        lst.push_filter_char(c)
    assert [item.title for item in lst.filtered_items] == ["Sprite"]
    lst.pop_filter_char()
    lst.pop_filter_char()
    assert lst.filter == "s"
    assert [item.title for item in lst.filtered_items] == ["Sprite"]
    lst.pop_filter_char()
    assert len(lst.filtered_items) == 4


def test_list_cancel_filter_clears_it():
    lst = create_list()
    lst.start_filter()
    lst.push_filter_char("c")
    lst.cancel_filter()
    assert not lst.showing_filter
    assert lst.filter == ""
    assert len(lst.filtered_items) == 4


def test_list_render_marks_selected_item():
    lst = create_list()
    lst.next()
    lines = lst.render().text_lines()
    assert lines[0] == "Groceries"
    # Two visible items, four rows each, after the title and a blank row
    assert len(lines) == 2 + 2 * 4
    assert lines[3] == "  Pocky"
    assert lines[7] == "│ Ginger"
    assert lines[8] == "│ Exquisite"


def test_list_render_shows_filter_in_title():
    lst = create_list()
    lst.start_filter()
    lst.push_filter_char("x")
    frame = lst.render()
    assert frame.text_lines()[0] == "Groceries | Filter: x"
    assert frame.text_lines()[2] == "  No items."
    assert frame.cursor == (0, len("Groceries | Filter: x"))
    assert lst.get_selected_item() is None


# --- Menu ---

def test_menu_wraps_and_toggles():
    menu = Menu("Main Menu", "Choose", ["Option 1", "Option 2", "Option 3"])
    menu.up()
    assert menu.selected_name() == "Option 3"
    menu.toggle_selection()
    menu.down()
    menu.toggle_selection()
    assert menu.checked_names() == ["Option 1", "Option 3"]
    menu.up()
    menu.toggle_selection()
    assert menu.checked_names() == ["Option 1"]


def test_menu_render():
    menu = Menu("Main Menu", "Choose", ["Option 1", "Option 2"])
    menu.toggle_selection()
    lines = menu.render().text_lines()
    assert lines[:3] == ["Main Menu", "Choose", ""]
    assert lines[3] == "> ✓ Option 1"
    assert lines[4] == "    Option 2"


def test_empty_menu():
    menu = Menu("Empty", "", [])
    menu.down()
    menu.toggle_selection()
    assert menu.selected is None
    assert menu.selected_name() is None


# --- Table ---

def test_table_clamps_at_ends():
    table = create_table()
    table.move_cursor_up()
    assert table.selected_row == 0
    for _ in range(len(table.rows) + 5):
        table.move_cursor_down()
    assert table.selected_row == 9
    assert table.scroll_offset == 3


def test_table_paging():
    table = create_table(visible_lines=4)
    table.page_down()
    assert table.selected_row == 4
    table.page_down()
    table.page_down()
    assert table.selected_row == 9
    table.page_up()
    assert table.selected_row == 5
    assert table.selected_values() == ["6", "City6", "Somewhere"]


def test_table_initial_selection_is_clamped():
    table = create_table(selected_row=50)
    assert table.selected_row == 9


def test_column_widths_include_padding():
    widths = calculate_column_widths(["A", "Long header"], [["xyz", "b"]], 1)
    assert widths == [5, 13]


def test_table_render_borders():
    table = create_table(visible_lines=3, padding=1)
    lines = table.render().text_lines()
    assert lines[0].startswith("┌") and lines[0].endswith("┐")
    assert lines[-1].startswith("└") and lines[-1].endswith("┘")
    # Top, header, separator, three rows, bottom
    assert len(lines) == 7
    assert all(len(line) == table.table_width for line in lines)


def test_table_rejects_ragged_rows():
    with pytest.raises(ConfigurationError):
        Table(["a", "b"], [["1", "2"], ["3"]])


def test_table_rejects_bad_parameters():
    with pytest.raises(ConfigurationError):
        Table([], [])
    with pytest.raises(ConfigurationError):
        Table(["a"], [["1"]], padding=-1)
    with pytest.raises(ConfigurationError):
        Table(["a"], [["1"]], visible_lines=0)
