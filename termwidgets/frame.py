"""Render views produced by widgets.

A widget never draws itself. It builds a :class:`Frame` describing the rows
it wants on screen, and the terminal interface turns that into escape
sequences. Frames are plain snapshots: the renderer may read them while the
widget keeps changing.
"""

from dataclasses import dataclass, field
from typing import Optional

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""
    text: str
    bold: bool = False
    italic: bool = False
    dim: bool = False
    reverse: bool = False
    color: Optional[RGB] = None


@dataclass
class Frame:
    """Rows of styled spans plus an optional cursor position.

    ``cursor`` is (row, column) relative to the frame origin, or None to
    hide the cursor while the frame is shown.
    """
    lines: list[list[Span]] = field(default_factory=list)
    cursor: Optional[tuple[int, int]] = None

    def add_line(self, *spans: Span) -> None:
        self.lines.append(list(spans))

    def add_text(self, text: str = "", **style) -> None:
        """Append a row made of a single span."""
        self.lines.append([Span(text, **style)])

    def text_lines(self) -> list[str]:
        """Plain text of every row, styles dropped."""
        return [''.join(span.text for span in line) for line in self.lines]

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def width(self) -> int:
        return max((len(line) for line in self.text_lines()), default=0)
