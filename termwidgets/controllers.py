"""Controllers bind key events to widget operations.

Each controller owns one widget, a :class:`CommandRegistry` describing which
keys do what, and a help legend. The event loop only talks to controllers:
it feeds them key events and clock ticks and draws the frame they return.
"""

import logging
import queue
from typing import Any, Callable, Optional

from .commands import (
    CancelCommand,
    Command,
    CommandRegistry,
    ControllerMethodCommand,
    InsertCharCommand,
    Outcome,
    SubmitCommand,
    WidgetCommand,
    WidgetMethodCommand,
)
from .constants import WidgetConstants
from .frame import Frame
from .help import HelpLegend
from .item_list import ItemList
from .keyboard import KeyEvent, KeyType
from .progress_bar import ProgressBar
from .spinner import FrameAdvanced
from .viewport import Viewport

logger = logging.getLogger(__name__)

CTRL_C = (KeyType.CTRL, 'c')
ESCAPE = (KeyType.SPECIAL, 'escape')
ENTER = (KeyType.SPECIAL, 'enter')
QUIT = (KeyType.REGULAR, 'q')


class WidgetController:
    """Base controller.

    Subclasses fill the registry in ``_register_commands`` and say what a
    submission returns in ``submit_value``.
    """

    # Seconds between clock ticks while idle, or None to wait for input only
    tick_interval: Optional[float] = None
    help_commands: tuple[Command, ...] = ()

    def __init__(self, widget: Any):
        self.widget = widget
        self.result: Any = None
        self.cancelled = False
        self.help = HelpLegend(self.help_commands)
        self.registry = CommandRegistry()
        self._register_commands()

    @property
    def target(self) -> Any:
        """Object that editing and navigation commands are called on."""
        return self.widget

    def _register_commands(self) -> None:
        self.registry.register(CTRL_C, CancelCommand())

    def handle_key(self, key_event: KeyEvent) -> Outcome:
        return self.registry.execute(self, key_event)

    def submit_value(self) -> Any:
        return None

    def submit(self) -> Outcome:
        self.result = self.submit_value()
        logger.debug("%s submitted %r", type(self).__name__, self.result)
        return Outcome.SUBMIT

    def cancel(self) -> None:
        self.cancelled = True
        self.result = None

    def tick(self) -> Outcome:
        """Called when the tick interval passes without input."""
        return Outcome.CONTINUE

    def attach(self, events: "queue.Queue[FrameAdvanced]",
               wakeup: Optional[Callable[[], None]] = None) -> None:
        """Route background frame events to the event loop."""

    def start(self) -> None:
        """Called once before the first frame is drawn."""

    def stop(self) -> None:
        """Called once when the event loop exits, however it exits."""

    def frame(self) -> Frame:
        """The widget's frame with the help legend underneath."""
        frame = self.widget.render()
        if self.help.active_commands:
            frame.add_text("")
            frame.lines.extend(self.help.render().lines)
        return frame


class TextAreaController(WidgetController):
    help_commands = (Command.TAB, Command.ESC, Command.CONTROL_C)

    @property
    def target(self):
        return self.widget.buffer

    def _register_commands(self):
        super()._register_commands()
        self.registry.fallback = InsertCharCommand()
        self.registry.register((KeyType.REGULAR, '\t'), SubmitCommand())
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(ENTER, WidgetMethodCommand('split_line'))
        self.registry.register((KeyType.SPECIAL, 'backspace'), WidgetMethodCommand('delete_char'))
        self.registry.register((KeyType.SPECIAL, 'delete'), WidgetMethodCommand('delete_forward'))
        for key in ('left', 'right', 'up', 'down', 'home', 'end'):
            self.registry.register((KeyType.SPECIAL, key), WidgetMethodCommand(f'move_{key}'))
        self.registry.register((KeyType.CTRL, 'a'), WidgetMethodCommand('move_home'))
        self.registry.register((KeyType.CTRL, 'e'), WidgetMethodCommand('move_end'))

    def submit_value(self):
        return self.widget.value


class TextInputController(WidgetController):
    help_commands = (Command.ENTER, Command.ESC)

    def _register_commands(self):
        super()._register_commands()
        self.registry.fallback = InsertCharCommand()
        self.registry.register(ENTER, SubmitCommand())
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register((KeyType.SPECIAL, 'backspace'), WidgetMethodCommand('delete_char'))
        for key in ('left', 'right', 'home', 'end'):
            self.registry.register((KeyType.SPECIAL, key), WidgetMethodCommand(f'move_{key}'))

    def submit_value(self):
        return self.widget.value


class FilterCharCommand(WidgetCommand):
    """Append a typed character to the list filter."""

    def execute(self, controller, key_event):
        char = key_event.value
        if char and ord(char[0]) >= 32:
            controller.widget.push_filter_char(char)
        return Outcome.CONTINUE


class ItemListController(WidgetController):
    """Browse mode and filter mode use separate registries.

    While filtering, every printable key edits the filter, so keys such as
    ``q`` and ``/`` lose their browse-mode meaning.
    """

    help_commands = (Command.UP, Command.DOWN, Command.FILTER, Command.ENTER, Command.QUIT)
    filter_help_commands = (Command.ESC, Command.BACKSPACE, Command.ENTER)

    def __init__(self, widget: ItemList):
        super().__init__(widget)
        self.help = HelpLegend(self.help_commands, self.filter_help_commands)

    def _register_commands(self):
        super()._register_commands()
        self.filter_registry = CommandRegistry(fallback=FilterCharCommand())
        for registry in (self.registry, self.filter_registry):
            registry.register(CTRL_C, CancelCommand())
            registry.register(ENTER, SubmitCommand())
            registry.register((KeyType.SPECIAL, 'up'), WidgetMethodCommand('previous'))
            registry.register((KeyType.SPECIAL, 'down'), WidgetMethodCommand('next'))
        self.registry.register((KeyType.REGULAR, 'k'), WidgetMethodCommand('previous'))
        self.registry.register((KeyType.REGULAR, 'j'), WidgetMethodCommand('next'))
        self.registry.register((KeyType.REGULAR, '/'), ControllerMethodCommand('start_filter'))
        self.registry.register(QUIT, CancelCommand())
        self.registry.register(ESCAPE, CancelCommand())
        self.filter_registry.register(ESCAPE, ControllerMethodCommand('cancel_filter'))
        self.filter_registry.register((KeyType.SPECIAL, 'backspace'),
                                      WidgetMethodCommand('pop_filter_char'))

    def start_filter(self) -> None:
        self.widget.start_filter()
        self.help.activate_filter_mode()

    def cancel_filter(self) -> None:
        self.widget.cancel_filter()
        self.help.deactivate_filter_mode()

    def handle_key(self, key_event):
        registry = self.filter_registry if self.widget.showing_filter else self.registry
        return registry.execute(self, key_event)

    def submit_value(self):
        item = self.widget.get_selected_item()
        return item.title if item is not None else None


class MenuController(WidgetController):
    help_commands = (Command.UP, Command.DOWN, Command.TOGGLE, Command.ENTER, Command.QUIT)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register((KeyType.SPECIAL, 'up'), WidgetMethodCommand('up'))
        self.registry.register((KeyType.REGULAR, 'k'), WidgetMethodCommand('up'))
        self.registry.register((KeyType.SPECIAL, 'down'), WidgetMethodCommand('down'))
        self.registry.register((KeyType.REGULAR, 'j'), WidgetMethodCommand('down'))
        self.registry.register((KeyType.CTRL, 't'), WidgetMethodCommand('toggle_selection'))
        self.registry.register(ENTER, SubmitCommand())
        self.registry.register(QUIT, CancelCommand())
        self.registry.register(ESCAPE, CancelCommand())

    def submit_value(self):
        return self.widget.selected_name()


class TableController(WidgetController):
    help_commands = (Command.UP, Command.DOWN, Command.PAGE, Command.ENTER, Command.ESC)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register((KeyType.SPECIAL, 'up'), WidgetMethodCommand('move_cursor_up'))
        self.registry.register((KeyType.REGULAR, 'k'), WidgetMethodCommand('move_cursor_up'))
        self.registry.register((KeyType.SPECIAL, 'down'), WidgetMethodCommand('move_cursor_down'))
        self.registry.register((KeyType.REGULAR, 'j'), WidgetMethodCommand('move_cursor_down'))
        self.registry.register((KeyType.SPECIAL, 'page_up'), WidgetMethodCommand('page_up'))
        self.registry.register((KeyType.SPECIAL, 'page_down'), WidgetMethodCommand('page_down'))
        self.registry.register(ENTER, SubmitCommand())
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def submit_value(self):
        return self.widget.selected_values()


class ViewportController(WidgetController):
    help_commands = (Command.UP, Command.DOWN, Command.PAGE, Command.QUIT)

    def __init__(self, widget: Viewport, mouse_scroll: bool = True):
        self.mouse_scroll = mouse_scroll
        super().__init__(widget)

    def _register_commands(self):
        super()._register_commands()
        bindings = {
            (KeyType.SPECIAL, 'up'): 'scroll_up',
            (KeyType.REGULAR, 'k'): 'scroll_up',
            (KeyType.SPECIAL, 'down'): 'scroll_down',
            (KeyType.REGULAR, 'j'): 'scroll_down',
            (KeyType.SPECIAL, 'page_up'): 'page_up',
            (KeyType.SPECIAL, 'page_down'): 'page_down',
            (KeyType.REGULAR, ' '): 'page_down',
            (KeyType.SPECIAL, 'home'): 'scroll_to_top',
            (KeyType.SPECIAL, 'end'): 'scroll_to_bottom',
        }
        if self.mouse_scroll:
            bindings[(KeyType.MOUSE, 'scroll_up')] = 'scroll_up'
            bindings[(KeyType.MOUSE, 'scroll_down')] = 'scroll_down'
        for key, method in bindings.items():
            self.registry.register(key, WidgetMethodCommand(method))
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def submit_value(self):
        return self.widget.scroller.scroll_offset


class SpinnerController(WidgetController):
    """Runs the spinner for as long as the event loop runs."""

    help_commands = (Command.ESC, Command.CONTROL_C)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def attach(self, events, wakeup=None):
        self.widget.attach(events, wakeup)

    def start(self):
        self.widget.start()

    def stop(self):
        # The clock may be mid-tick; wait so it never wakes a closed loop
        self.widget.stop()
        self.widget.indicator.join()

    def cancel(self):
        self.widget.stop()
        super().cancel()


class ProgressController(WidgetController):
    """Fills the bar by ``step`` every tick and submits at 100%."""

    tick_interval = WidgetConstants.CLOCK_TICK_RATE
    help_commands = (Command.ESC, Command.CONTROL_C)

    def __init__(self, widget: ProgressBar, step: float = 0.01):
        self.step = step
        super().__init__(widget)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def tick(self):
        self.widget.update(self.widget.progress + self.step)
        if self.widget.progress >= 1.0:
            return self.submit()
        return Outcome.CONTINUE

    def submit_value(self):
        return self.widget.progress


class StopWatchController(WidgetController):
    tick_interval = WidgetConstants.CLOCK_TICK_RATE
    help_commands = (Command.SPACE, Command.RESET, Command.QUIT)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register((KeyType.REGULAR, ' '), WidgetMethodCommand('toggle'))
        self.registry.register((KeyType.REGULAR, 'r'), WidgetMethodCommand('reset'))
        self.registry.register(ENTER, SubmitCommand())
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def submit_value(self):
        return self.widget.elapsed()


class TimerController(WidgetController):
    """Submits on the first tick after the countdown reaches zero."""

    tick_interval = WidgetConstants.CLOCK_TICK_RATE
    help_commands = (Command.QUIT,)

    def _register_commands(self):
        super()._register_commands()
        self.registry.register(ESCAPE, CancelCommand())
        self.registry.register(QUIT, CancelCommand())

    def tick(self):
        if self.widget.is_done():
            return self.submit()
        return Outcome.CONTINUE

    def submit_value(self):
        return self.widget.DONE_TEXT
