"""Test keyboard and mouse-wheel input parsing."""

import pytest
from termwidgets.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface handing out queued curtsies tokens."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler_and_terminal():
    terminal = MockTerminal()
    return KeyboardHandler(terminal), terminal


def test_no_key_returns_none(handler_and_terminal):
    handler, _ = handler_and_terminal
    assert handler.get_key_event(timeout=0) is None


def test_regular_characters(handler_and_terminal):
    handler, terminal = handler_and_terminal
    for ch in ('a', 'Q', '/', 'é'):
        terminal.add_key(ch)
        event = handler.get_key_event()
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch


def test_special_keys(handler_and_terminal):
    handler, terminal = handler_and_terminal
    tokens = {
        '<LEFT>': 'left', '<RIGHT>': 'right', '<UP>': 'up', '<DOWN>': 'down',
        '<HOME>': 'home', '<END>': 'end', '<DELETE>': 'delete',
        '<PAGEUP>': 'page_up', '<PAGEDOWN>': 'page_down', '<F1>': 'f1',
    }
    for token, value in tokens.items():
        terminal.add_key(token)
        event = handler.get_key_event()
        assert event.key_type == KeyType.SPECIAL, token
        assert event.value == value


def test_enter_variants(handler_and_terminal):
    handler, terminal = handler_and_terminal
    for token in ('<Ctrl-j>', '<Ctrl-m>', '\n', '\r'):
        terminal.add_key(token)
        event = handler.get_key_event()
        assert (event.key_type, event.value) == (KeyType.SPECIAL, 'enter'), repr(token)


def test_backspace_variants(handler_and_terminal):
    handler, terminal = handler_and_terminal
    for token in ('\x7f', '\x08', '<BACKSPACE>'):
        terminal.add_key(token)
        event = handler.get_key_event()
        assert (event.key_type, event.value) == (KeyType.SPECIAL, 'backspace'), repr(token)


def test_tab_and_space(handler_and_terminal):
    handler, terminal = handler_and_terminal
    terminal.add_key('<TAB>')
    terminal.add_key('<SPACE>')
    terminal.add_key('\t')
    assert handler.get_key_event().value == '\t'
    assert handler.get_key_event().value == ' '
    event = handler.get_key_event()
    assert (event.key_type, event.value) == (KeyType.REGULAR, '\t')


def test_ctrl_keys(handler_and_terminal):
    handler, terminal = handler_and_terminal
    terminal.add_key('\x03')
    terminal.add_key('<Ctrl-t>')
    for value in ('c', 't'):
        event = handler.get_key_event()
        assert event.key_type == KeyType.CTRL
        assert event.value == value
        assert event.is_ctrl


def test_escape(handler_and_terminal):
    handler, terminal = handler_and_terminal
    terminal.add_key('<ESC>')
    terminal.add_key('\x1b')
    for _ in range(2):
        event = handler.get_key_event()
        assert (event.key_type, event.value) == (KeyType.SPECIAL, 'escape')
        assert not event.is_alt


def test_alt_keys(handler_and_terminal):
    handler, terminal = handler_and_terminal
    terminal.add_key('<Esc+b>')
    terminal.add_key('<Meta-LEFT>')
    event = handler.get_key_event()
    assert (event.key_type, event.value, event.is_alt) == (KeyType.ALT, 'b', True)
    event = handler.get_key_event()
    assert (event.key_type, event.value) == (KeyType.ALT, 'left')


def test_shift_arrows(handler_and_terminal):
    handler, terminal = handler_and_terminal
    terminal.add_key('<Shift-UP>')
    event = handler.get_key_event()
    assert event.key_type == KeyType.SHIFT_SPECIAL
    assert event.value == 'up'
    assert event.is_shift


def test_mouse_wheel():
    handler = KeyboardHandler(MockTerminal())
    up = handler.parse_key('\x1b[<64;10;5M')
    down = handler.parse_key('\x1b[<65;10;5M')
    assert (up.key_type, up.value) == (KeyType.MOUSE, 'scroll_up')
    assert (down.key_type, down.value) == (KeyType.MOUSE, 'scroll_down')
    assert up.code == 64


def test_mouse_wheel_with_modifiers():
    """Shift/meta/ctrl bits on a wheel report are ignored."""
    handler = KeyboardHandler(MockTerminal())
    event = handler.parse_key('\x1b[<81;3;3M')  # 65 + ctrl(16)
    assert event.value == 'scroll_down'


def test_other_mouse_buttons():
    handler = KeyboardHandler(MockTerminal())
    event = handler.parse_key('\x1b[<0;1;1m')
    assert event == KeyEvent(key_type=KeyType.MOUSE, value='other', raw='\x1b[<0;1;1m',
                             is_sequence=True, code=0)
