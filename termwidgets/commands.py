"""Command pattern mapping key events to widget operations."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyEvent, KeyType

if TYPE_CHECKING:
    from .controllers import WidgetController


class Outcome(Enum):
    """What the event loop should do after a command ran."""
    CONTINUE = "continue"
    SUBMIT = "submit"
    CANCEL = "cancel"


class Command(Enum):
    """Named user commands, used for the help legend.

    Each member carries the key label and the short description shown to
    the user.
    """
    QUIT = ("q", "quit")
    BACKSPACE = ("Backspace", "backspace")
    DELETE = ("del", "delete")
    HELP = ("h", "help")
    CONTROL_C = ("cntrl+c", "exit")
    ENTER = ("⮐", "submit")
    FILTER = ("/", "filter")
    ESC = ("esc", "cancel")
    UP = ("↑/k", "up")
    DOWN = ("↓/j", "down")
    PAGE = ("pgup/pgdn", "page")
    TOGGLE = ("ctrl+t", "toggle")
    TAB = ("tab", "submit")
    SPACE = ("space", "pause")
    RESET = ("r", "reset")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


class WidgetCommand(ABC):
    """Base class for widget commands."""

    @abstractmethod
    def execute(self, controller: 'WidgetController', key_event: KeyEvent) -> Outcome:
        """Execute the command.

        Args:
            controller: Controller owning the widget
            key_event: The key event that triggered this command

        Returns:
            Outcome telling the event loop whether to keep going
        """


class WidgetMethodCommand(WidgetCommand):
    """Call a no-argument method on the controller's edit target."""

    def __init__(self, method_name: str):
        self.method_name = method_name

    def execute(self, controller, key_event):
        getattr(controller.target, self.method_name)()
        return Outcome.CONTINUE


class ControllerMethodCommand(WidgetCommand):
    """Call a no-argument method on the controller itself."""

    def __init__(self, method_name: str):
        self.method_name = method_name

    def execute(self, controller, key_event):
        result = getattr(controller, self.method_name)()
        return result if isinstance(result, Outcome) else Outcome.CONTINUE


class InsertCharCommand(WidgetCommand):
    """Type a printable character into the widget."""

    def execute(self, controller, key_event):
        char = key_event.value
        # Filter out control characters
        if char and (ord(char[0]) >= 32 or char == '\t'):
            controller.target.insert_char(char)
        return Outcome.CONTINUE


class SubmitCommand(WidgetCommand):
    def execute(self, controller, key_event):
        return controller.submit()


class CancelCommand(WidgetCommand):
    def execute(self, controller, key_event):
        controller.cancel()
        return Outcome.CANCEL


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self, fallback: Optional[WidgetCommand] = None):
        self._commands: Dict[Tuple[KeyType, str], WidgetCommand] = {}
        # Used for REGULAR keys without a binding, e.g. typing text
        self.fallback = fallback

    def register(self, key: Tuple[KeyType, str], command: WidgetCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def unregister(self, key: Tuple[KeyType, str]) -> None:
        self._commands.pop(key, None)

    def get_command(self, key_type: KeyType, value: str) -> Optional[WidgetCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, controller: 'WidgetController', key_event: KeyEvent) -> Outcome:
        """Execute the command bound to the given key event.

        Returns:
            The command's Outcome, or CONTINUE if nothing was bound
        """
        if key_event.is_alt:
            command = self.get_command(KeyType.ALT, key_event.value)
        else:
            command = self.get_command(key_event.key_type, key_event.value)

        if command:
            return command.execute(controller, key_event)

        if key_event.key_type == KeyType.REGULAR and self.fallback is not None:
            return self.fallback.execute(controller, key_event)

        return Outcome.CONTINUE
