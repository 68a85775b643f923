"""Gradient progress bar."""

from .constants import WidgetConstants
from .errors import ConfigurationError
from .frame import RGB, Frame, Span


def blend_color(start: RGB, end: RGB, ratio: float) -> RGB:
    """Linear blend between two RGB colors; ratio is clamped to [0, 1]."""
    ratio = max(0.0, min(1.0, ratio))
    return tuple(round(a + (b - a) * ratio) for a, b in zip(start, end))  # type: ignore[return-value]


class ProgressBar:
    """A row of cells filled up to ``progress`` (0.0 to 1.0).

    Filled cells fade from ``start_color`` to ``end_color`` along the bar.
    """

    def __init__(self, prefix: str = "", progress: float = 0.0,
                 length: int = WidgetConstants.PROGRESS_BAR_LENGTH,
                 start_color: RGB = WidgetConstants.PROGRESS_START_COLOR,
                 end_color: RGB = WidgetConstants.PROGRESS_END_COLOR):
        if length < 1:
            raise ConfigurationError(f"length must be at least 1 cell, got {length}")
        self.prefix = prefix
        self.length = length
        self.start_color = start_color
        self.end_color = end_color
        self.progress = 0.0
        self.update(progress)

    def update(self, progress: float) -> None:
        self.progress = max(0.0, min(1.0, float(progress)))

    def filled_cells(self) -> int:
        return sum(1 for i in range(self.length) if i / self.length < self.progress)

    def percentage_text(self) -> str:
        return f" {self.progress * 100:.0f}%"

    def render(self) -> Frame:
        spans: list[Span] = []
        if self.prefix:
            spans.append(Span(f"{self.prefix} "))
        for i in range(self.length):
            ratio = i / self.length
            if ratio < self.progress:
                color = blend_color(self.start_color, self.end_color, ratio)
            else:
                color = WidgetConstants.PROGRESS_EMPTY_COLOR
            spans.append(Span(WidgetConstants.PROGRESS_FILLED_CELL, color=color))
        spans.append(Span(self.percentage_text()))
        frame = Frame()
        frame.add_line(*spans)
        return frame
