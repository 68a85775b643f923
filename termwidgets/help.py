"""Help legend listing the keys a widget responds to."""

from typing import Iterable, Optional

from .commands import Command
from .constants import WidgetConstants
from .frame import Frame, Span


class HelpLegend:
    """A one-line key legend with a separate command set for filter mode."""

    def __init__(self, normal_commands: Iterable[Command],
                 filter_commands: Optional[Iterable[Command]] = None):
        self.normal_commands = list(normal_commands)
        self.filter_commands = list(filter_commands) if filter_commands is not None else None
        self.active_commands = list(self.normal_commands)

    def activate_filter_mode(self) -> None:
        if self.filter_commands is not None:
            self.active_commands = list(self.filter_commands)

    def deactivate_filter_mode(self) -> None:
        self.active_commands = list(self.normal_commands)

    def render_text(self) -> str:
        """Legend as plain text, e.g. ``q quit • / filter``."""
        return WidgetConstants.HELP_SEPARATOR.join(
            f"{cmd.key} {cmd.description}" for cmd in self.active_commands
        )

    def render(self) -> Frame:
        spans: list[Span] = []
        for i, cmd in enumerate(self.active_commands):
            if i:
                spans.append(Span(WidgetConstants.HELP_SEPARATOR, dim=True))
            spans.append(Span(f"{cmd.key} ", dim=True))
            spans.append(Span(cmd.description, dim=True, bold=True))
        frame = Frame()
        frame.add_line(*spans)
        return frame
