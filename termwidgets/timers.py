"""Stopwatch and countdown timer."""

import time
from typing import Callable

from .errors import ConfigurationError
from .frame import Frame

Clock = Callable[[], float]


def format_duration(seconds: float) -> str:
    """Human-readable duration with millisecond precision.

    >>> format_duration(0.5)
    '500ms'
    >>> format_duration(5.123)
    '5.123s'
    >>> format_duration(65.5)
    '1:05.500m'
    >>> format_duration(3725.25)
    '1:02:05.250h'
    """
    total_ms = round(max(0.0, seconds) * 1000)
    secs, millis = divmod(total_ms, 1000)
    minutes, sec = divmod(secs, 60)
    hours, minute = divmod(minutes, 60)
    if secs == 0:
        return f"{millis:03}ms"
    if secs < 60:
        return f"{secs}.{millis:03}s"
    if secs < 3600:
        return f"{minutes}:{sec:02}.{millis:03}m"
    return f"{hours}:{minute:02}:{sec:02}.{millis:03}h"


class StopWatch:
    """Counts up while running; ``toggle()`` pauses and resumes."""

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._accumulated = 0.0
        self._started_at = clock()
        self.running = True

    def elapsed(self) -> float:
        if self.running:
            return self._accumulated + (self._clock() - self._started_at)
        return self._accumulated

    def toggle(self) -> None:
        now = self._clock()
        if self.running:
            self._accumulated += now - self._started_at
            self.running = False
        else:
            self._started_at = now
            self.running = True

    def reset(self) -> None:
        self._accumulated = 0.0
        self._started_at = self._clock()
        self.running = True

    def render(self) -> Frame:
        frame = Frame()
        frame.add_text(f"Elapsed: {format_duration(self.elapsed())}")
        return frame


class Timer:
    """Counts down from ``duration`` seconds and stops at zero."""

    DONE_TEXT = "All done"

    def __init__(self, duration: float, clock: Clock = time.monotonic):
        if duration < 0:
            raise ConfigurationError(f"duration cannot be negative, got {duration}")
        self._clock = clock
        self.duration = duration
        self._started_at = clock()

    def time_remaining(self) -> float:
        elapsed = self._clock() - self._started_at
        return max(0.0, self.duration - elapsed)

    def is_done(self) -> bool:
        return self.time_remaining() <= 0

    def render(self) -> Frame:
        frame = Frame()
        if self.is_done():
            frame.add_text(self.DONE_TEXT, bold=True)
        else:
            frame.add_text(f"Exiting in {format_duration(self.time_remaining())}")
        return frame
