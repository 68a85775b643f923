"""Single-line text input with placeholder and prefix."""

from typing import Optional

from .errors import ConfigurationError
from .frame import Frame, Span


class TextInput:
    """A one-line editable field.

    The placeholder is shown while the field is empty. If the field was
    created holding the placeholder text itself, the first keystroke
    replaces it instead of appending to it.
    """

    def __init__(self, placeholder: Optional[str] = None, padding: int = 0,
                 initial_text: str = "", label: str = "", helper: Optional[str] = None,
                 prefix: str = ""):
        if padding < 0:
            raise ConfigurationError(f"padding cannot be negative, got {padding}")
        self.text = initial_text
        self.cursor_position = len(initial_text)
        self.placeholder = placeholder
        self.padding = padding
        self.label = label
        self.helper = helper
        self.prefix = prefix

    @property
    def value(self) -> str:
        return self.text

    def _showing_placeholder(self) -> bool:
        return not self.text or (self.placeholder is not None and self.text == self.placeholder)

    def insert_char(self, c: str) -> None:
        if self._showing_placeholder():
            self.text = ""
            self.cursor_position = 0
        self.text = self.text[:self.cursor_position] + c + self.text[self.cursor_position:]
        self.cursor_position += 1

    def delete_char(self) -> None:
        if self.cursor_position > 0:
            pos = self.cursor_position
            self.text = self.text[:pos - 1] + self.text[pos:]
            self.cursor_position -= 1

    def move_left(self) -> None:
        if self.cursor_position > 0:
            self.cursor_position -= 1

    def move_right(self) -> None:
        if self.cursor_position < len(self.text):
            self.cursor_position += 1

    def move_home(self) -> None:
        self.cursor_position = 0

    def move_end(self) -> None:
        self.cursor_position = len(self.text)

    def render(self) -> Frame:
        frame = Frame()
        indent = " " * self.padding
        frame.add_text(indent + self.label, bold=True)
        frame.add_text("")
        prefix = f"{self.prefix} " if self.prefix else ""
        if self.text:
            body = Span(self.text)
        else:
            body = Span(self.placeholder or "", dim=True)
        frame.add_line(Span(indent + prefix), body)
        if self.helper:
            frame.add_text("")
            frame.add_text("")
            frame.add_text(indent + self.helper, dim=True)
        frame.cursor = (2, len(indent) + len(prefix) + self.cursor_position)
        return frame
