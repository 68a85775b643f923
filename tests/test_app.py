"""Test the widget event loop with a mocked terminal and keyboard."""

import os
import signal
import termios
import time
from unittest.mock import MagicMock, Mock, patch

import pytest

from termwidgets.app import WidgetApp
from termwidgets.controllers import MenuController, SpinnerController, TimerController
from termwidgets.frame import Frame
from termwidgets.keyboard import KeyEvent, KeyType
from termwidgets.menu import Menu
from termwidgets.spinner import FrameAdvanced, Spinner
from termwidgets.timers import Timer

QUIT_KEY = KeyEvent(key_type=KeyType.REGULAR, value='q', raw='q')
ENTER_KEY = KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw='\r', is_sequence=True)


def create_app(controller=None):
    terminal = MagicMock()
    terminal.width = 80
    terminal.height = 24
    keyboard = Mock()
    controller = controller or MenuController(Menu("Main Menu", "", ["Option 1", "Option 2"]))
    return WidgetApp(controller, terminal=terminal, keyboard=keyboard, x=5, y=5)


@pytest.fixture(autouse=True)
def no_termios():
    """Tests have no real tty to reconfigure."""
    with patch('termwidgets.app.termios.tcgetattr', side_effect=termios.error("no tty")):
        yield


def test_key_event_ends_loop_and_returns_result():
    app = create_app()
    app.keyboard.get_key_event.return_value = ENTER_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        result = app.run()

    assert result == "Option 1"
    app.terminal.setup.assert_called_once()
    app.terminal.cleanup.assert_called_once()
    # Non-blocking read after select reported stdin ready
    app.keyboard.get_key_event.assert_called_with(timeout=0)


def test_cancel_returns_none():
    app = create_app()
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        assert app.run() is None
    assert app.controller.cancelled


def test_draws_initial_frame_and_after_each_event():
    app = create_app()
    app.keyboard.get_key_event.side_effect = [
        KeyEvent(key_type=KeyType.SPECIAL, value='down', raw='', is_sequence=True),
        ENTER_KEY,
    ]
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        result = app.run()

    assert result == "Option 2"
    # Initial, after 'down', and the final frame once the loop ends
    assert app.terminal.draw_frame.call_count == 3
    frame = app.terminal.draw_frame.call_args.args[0]
    assert frame.text_lines()[0] == "Main Menu"
    assert app.terminal.draw_frame.call_args.args[1:3] == (5, 5)


def test_resize_triggers_redraw():
    """A SIGWINCH wakes select through the pipe and forces a redraw."""
    app = create_app()
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select') as mock_select:
        mock_select.side_effect = [
            ([app._wake_pipe_r], [], []),
            ([0], [], []),
        ]
        app._handle_resize(signal.SIGWINCH, None)
        app.run()

    assert app.terminal.draw_frame.call_count == 3


def test_sigint_becomes_ctrl_c_event():
    app = create_app()

    def select_after_sigint(*args):
        app._handle_sigint(signal.SIGINT, None)
        return ([app._wake_pipe_r], [], [])

    with patch('termwidgets.app.select.select', side_effect=select_after_sigint):
        assert app.run() is None

    assert app.controller.cancelled
    app.keyboard.get_key_event.assert_not_called()


def test_idle_timeout_ticks_controller():
    now = [0.0]
    controller = TimerController(Timer(1.0, clock=lambda: now[0]))
    app = create_app(controller)

    def select_and_advance(rlist, wlist, xlist, timeout):
        assert timeout == controller.tick_interval
        now[0] += 0.6
        return ([], [], [])

    with patch('termwidgets.app.select.select', side_effect=select_and_advance) as mock_select:
        assert app.run() == "All done"
    assert mock_select.call_count == 2
    last_frame = app.terminal.draw_frame.call_args.args[0]
    assert last_frame.text_lines()[0] == "All done"


def test_input_only_controller_blocks_in_select():
    app = create_app()
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])) as mock_select:
        app.run()
    assert mock_select.call_args.args[3] is None


def test_controller_start_and_stop_wrap_the_loop():
    controller = Mock()
    controller.tick_interval = None
    controller.frame.return_value = Frame()
    controller.handle_key.return_value = Mock()  # anything but CONTINUE ends the loop
    app = create_app(controller)
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        app.run()
    controller.attach.assert_called_once_with(app.events, app._wake)
    controller.start.assert_called_once_with()
    controller.stop.assert_called_once_with()


def test_pipe_closed_after_run():
    app = create_app()
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        app.run()
    with pytest.raises(OSError):
        os.write(app._wake_pipe_w, b'x')


def test_drain_events():
    app = create_app()
    app.events.put(FrameAdvanced(1, 1))
    app.events.put(FrameAdvanced(1, 2))
    assert app._drain_events() == 2
    assert app.events.empty()


def test_shrinking_frame_clears_leftover_rows():
    controller = Mock()
    tall, short = Frame(), Frame()
    for _ in range(5):
        tall.add_text("row")
    short.add_text("row")
    controller.frame.side_effect = [tall, short]
    app = create_app(controller)

    app.draw()
    app.terminal.clear_region.assert_not_called()
    app.draw()
    app.terminal.clear_region.assert_called_once_with(5, 6, 75, 4)


def test_spinner_clock_finished_when_run_returns():
    """A clock mid-tick must not write into the pipe after it is closed."""
    spinner = Spinner("Loading", style="Line", frame_interval=0.01)
    app = create_app(SpinnerController(spinner))
    original_wake = app._wake

    def slow_wake():
        time.sleep(0.05)
        original_wake()

    app._wake = slow_wake
    app.keyboard.get_key_event.return_value = KeyEvent(
        key_type=KeyType.SPECIAL, value='escape', raw='\x1b', is_sequence=True)

    def select_after_delay(*args):
        time.sleep(0.03)
        return ([0], [], [])

    with patch('termwidgets.app.select.select', side_effect=select_after_delay):
        assert app.run() is None

    assert not spinner.indicator.running
    assert not spinner.indicator._thread.is_alive()


def test_wake_after_close_is_ignored():
    app = create_app()
    app.keyboard.get_key_event.return_value = QUIT_KEY
    with patch('termwidgets.app.select.select', return_value=([0], [], [])):
        app.run()
    app._wake()
