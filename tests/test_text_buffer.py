"""Test the multi-line text buffer and the TextArea widget."""

import pytest
from termwidgets.errors import ConfigurationError
from termwidgets.text_area import CursorPosition, TextArea, TextEditBuffer


def create_buffer(lines, line_index=0, column=0, visible_height=6):
    """Create a buffer holding ``lines`` with the cursor at (line_index, column)."""
    buf = TextEditBuffer(visible_height, lines=lines)
    buf.cursor = CursorPosition(line_index, column)
    return buf


def test_typing_then_split():
    """Typing 'ab' then Enter leaves ['ab', ''] with the cursor on the new line."""
    buf = TextEditBuffer(6)
    buf.insert_char('a')
    buf.insert_char('b')
    assert buf.lines == ["ab"]
    assert buf.cursor == CursorPosition(0, 2)

    buf.split_line()
    assert buf.lines == ["ab", ""]
    assert buf.cursor == CursorPosition(1, 0)


def test_insert_in_middle():
    buf = create_buffer(["hllo"], 0, 1)
    buf.insert_char('e')
    assert buf.lines == ["hello"]
    assert buf.cursor.column == 2


def test_newline_characters_split():
    buf = create_buffer(["onetwo"], 0, 3)
    buf.insert_char('\n')
    assert buf.lines == ["one", "two"]
    buf.move_end()
    buf.insert_char('\r')
    assert buf.lines == ["one", "two", ""]


def test_insert_text():
    buf = TextEditBuffer(6)
    buf.insert_text("ab\ncd")
    assert buf.text == "ab\ncd"
    assert buf.cursor == CursorPosition(1, 2)


def test_split_then_backspace_restores_line():
    for column in range(len("hello")+1):
        buf = create_buffer(["hello", "world"], 0, column)
        buf.split_line()
        buf.delete_char()
        assert buf.lines == ["hello", "world"]
        assert buf.cursor == CursorPosition(0, column)


def test_backspace_removes_previous_char():
    buf = create_buffer(["hello"], 0, 5)
    buf.delete_char()
    assert buf.lines == ["hell"]
    assert buf.cursor.column == 4


def test_backspace_at_line_start_merges():
    """Cursor lands where the previous line used to end."""
    buf = create_buffer(["first", "second"], 1, 0)
    buf.delete_char()
    assert buf.lines == ["firstsecond"]
    assert buf.cursor == CursorPosition(0, 5)


def test_backspace_at_buffer_start_does_nothing():
    buf = create_buffer(["abc"], 0, 0)
    buf.delete_char()
    assert buf.lines == ["abc"]
    assert buf.cursor == CursorPosition(0, 0)


def test_delete_forward():
    buf = create_buffer(["abc"], 0, 1)
    buf.delete_forward()
    assert buf.lines == ["ac"]
    assert buf.cursor.column == 1


def test_delete_forward_joins_next_line():
    buf = create_buffer(["ab", "cd"], 0, 2)
    buf.delete_forward()
    assert buf.lines == ["abcd"]
    assert buf.cursor == CursorPosition(0, 2)


def test_delete_forward_at_end_does_nothing():
    buf = create_buffer(["ab"], 0, 2)
    buf.delete_forward()
    assert buf.lines == ["ab"]


def test_move_left_wraps_to_previous_line():
    buf = create_buffer(["abc", "de"], 1, 0)
    buf.move_left()
    assert buf.cursor == CursorPosition(0, 3)


def test_move_right_wraps_to_next_line():
    buf = create_buffer(["abc", "de"], 0, 3)
    buf.move_right()
    assert buf.cursor == CursorPosition(1, 0)


def test_moves_stop_at_buffer_edges():
    buf = create_buffer(["abc", "de"], 0, 0)
    buf.move_left()
    buf.move_up()
    assert buf.cursor == CursorPosition(0, 0)

    buf = create_buffer(["abc", "de"], 1, 2)
    buf.move_right()
    buf.move_down()
    assert buf.cursor == CursorPosition(1, 2)


def test_vertical_move_clamps_column():
    buf = create_buffer(["a long line", "ab"], 0, 9)
    buf.move_down()
    assert buf.cursor == CursorPosition(1, 2)


def test_home_and_end():
    buf = create_buffer(["hello"], 0, 2)
    buf.move_end()
    assert buf.cursor.column == 5
    buf.move_home()
    assert buf.cursor.column == 0


def test_scroll_follows_cursor():
    """Typing past the visible height scrolls the window down."""
    buf = TextEditBuffer(3)
    for _ in range(5):
        buf.split_line()
    assert buf.cursor.line_index == 5
    assert buf.scroll_offset == 3
    assert [i for i, _ in buf.visible_lines()] == [3, 4, 5]

    for _ in range(5):
        buf.move_up()
    assert buf.scroll_offset == 0


def test_set_text_places_cursor_at_end():
    buf = TextEditBuffer(2)
    buf.set_text("one\ntwo\nthree")
    assert buf.lines == ["one", "two", "three"]
    assert buf.cursor == CursorPosition(2, 5)
    assert buf.scroll_offset == 1


def test_invariants_hold_after_random_edits():
    buf = TextEditBuffer(2)
    operations = [
        lambda: buf.insert_char('x'), buf.split_line, buf.delete_char, buf.delete_forward,
        buf.move_left, buf.move_right, buf.move_up, buf.move_down,
    ]
    for step in range(200):
        operations[(step * 7) % len(operations)]()
        assert 0 <= buf.cursor.line_index < len(buf.lines)
        assert 0 <= buf.cursor.column <= len(buf.lines[buf.cursor.line_index])
        assert buf.scroll_offset <= buf.cursor.line_index < buf.scroll_offset + 2


def test_visible_height_must_be_positive():
    with pytest.raises(ConfigurationError):
        TextEditBuffer(0)


def test_text_area_render():
    area = TextArea("Type here:", helper="Press ESC to exit.", visible_lines=3)
    area.buffer.insert_text("hi")
    frame = area.render()
    lines = frame.text_lines()
    assert lines[0] == "Type here:"
    assert lines[2] == "|  1 hi"
    assert lines[3] == "|  2 "
    assert lines[-1] == "Press ESC to exit."
    # Cursor sits after the gutter, on the first text row
    assert frame.cursor == (2, 7)
    assert area.value == "hi"
