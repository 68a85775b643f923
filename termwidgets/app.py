"""Event loop running one widget controller in the terminal."""

import logging
import os
import queue
import select
import signal
import sys
import termios
import threading
from typing import Any, Optional

from .commands import Outcome
from .constants import WidgetConstants
from .controllers import WidgetController
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .spinner import FrameAdvanced
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class WidgetApp:
    """Runs a controller until it submits or cancels.

    One input event causes one widget update followed by one redraw. Three
    things besides stdin can wake the loop, all through a self-pipe: a
    terminal resize, a Ctrl-C delivered as SIGINT, and a frame posted by a
    background clock (the spinner). Frame events themselves travel on a
    queue that is drained before each redraw.
    """

    def __init__(self, controller: WidgetController,
                 terminal: Optional[TerminalInterface] = None,
                 keyboard: Optional[KeyboardHandler] = None,
                 x: int = 0, y: int = 0):
        self.controller = controller
        self.terminal = terminal or TerminalInterface()
        self.keyboard = keyboard or KeyboardHandler(self.terminal)
        self.x = x
        self.y = y
        self.events: "queue.Queue[FrameAdvanced]" = queue.Queue()
        self.running = False
        self._last_height = 0
        self._ctrl_c_pressed = False
        # Create pipe for resize, SIGINT and frame signaling
        self._wake_pipe_r, self._wake_pipe_w = os.pipe()
        self._pipe_lock = threading.Lock()
        self._pipe_closed = False

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._wake_pipe_w, WidgetConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT by feeding the controller a Ctrl-C key event."""
        del signum, frame  # Unused
        self._ctrl_c_pressed = True
        os.write(self._wake_pipe_w, WidgetConstants.SIGINT_PIPE_MARKER)

    def _wake(self) -> None:
        """Called from background clocks after posting a frame event."""
        with self._pipe_lock:
            if self._pipe_closed:
                return
            os.write(self._wake_pipe_w, WidgetConstants.FRAME_PIPE_MARKER)

    def _drain_events(self) -> int:
        """Consume pending frame events; returns how many there were."""
        count = 0
        while True:
            try:
                self.events.get_nowait()
            except queue.Empty:
                return count
            count += 1

    def draw(self) -> None:
        """Draw the controller's current frame, clearing rows it no longer uses."""
        frame = self.controller.frame()
        clear_width = max(frame.width, self.terminal.width - self.x)
        if frame.height < self._last_height:
            self.terminal.clear_region(self.x, self.y + frame.height, clear_width,
                                       self._last_height - frame.height)
        self.terminal.draw_frame(frame, self.x, self.y, clear_width=clear_width)
        self._last_height = frame.height

    def handle_key_event(self, key_event: KeyEvent) -> Outcome:
        outcome = self.controller.handle_key(key_event)
        if outcome is not Outcome.CONTINUE:
            self.running = False
        return outcome

    def _tick(self) -> None:
        outcome = self.controller.tick()
        if outcome is not Outcome.CONTINUE:
            self.running = False

    def run(self) -> Any:
        """Run the loop and return the controller's result (None if cancelled)."""
        self.terminal.setup()
        self.running = True
        self._ctrl_c_pressed = False
        self.controller.attach(self.events, self._wake)

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            with self.terminal.term.cbreak():
                # Disable flow control AFTER entering cbreak mode
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    # Disable IXON/IXOFF so Ctrl-S and Ctrl-Q reach the widget
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    # Disable IEXTEN so Ctrl-V (VLNEXT) is not intercepted by tty
                    new_settings[3] &= ~termios.IEXTEN
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError) as e:
                    logger.debug(f"Leaving terminal flags unchanged: {e}")
                    old_settings = None

                self.controller.start()
                try:
                    self._loop()
                finally:
                    self.controller.stop()

                if old_settings:
                    try:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                    except (termios.error, OSError) as e:
                        logger.warning(f"Could not restore terminal flags: {e}")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            with self._pipe_lock:
                self._pipe_closed = True
                os.close(self._wake_pipe_r)
                os.close(self._wake_pipe_w)
            self.terminal.cleanup()

        return self.controller.result

    def _loop(self) -> None:
        need_draw = True
        while self.running:
            if need_draw:
                self._drain_events()
                self.draw()
                need_draw = False

            # Use file descriptor 0 for stdin to work in all environments
            ready, _, _ = select.select([0, self._wake_pipe_r], [], [],
                                        self.controller.tick_interval)

            if not ready:
                self._tick()
                need_draw = True
            elif self._wake_pipe_r in ready:
                os.read(self._wake_pipe_r, 1024)
                if self._ctrl_c_pressed:
                    self._ctrl_c_pressed = False
                    ctrl_c_event = KeyEvent(
                        key_type=KeyType.CTRL,
                        value='c',
                        raw='\x03',
                        is_ctrl=True
                    )
                    self.handle_key_event(ctrl_c_event)
                need_draw = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self.handle_key_event(key_event)
                    need_draw = True

        # Show the final state (e.g. a finished timer) before leaving
        self._drain_events()
        self.draw()


def run_widget(controller: WidgetController, **kwargs) -> Any:
    """Convenience wrapper: build a WidgetApp and run it."""
    return WidgetApp(controller, **kwargs).run()
