"""Spinner: a frame index advanced by a background clock.

The background thread never draws. Each tick it advances the frame index
and posts a :class:`FrameAdvanced` event on a queue; the event loop drains
the queue and redraws from its own thread. An optional ``wakeup`` callback
lets the loop leave a blocking wait as soon as a frame is posted.
"""

import itertools
import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from .constants import WidgetConstants
from .errors import ConfigurationError
from .frame import RGB, Frame, Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinnerStyle:
    frames: tuple[str, ...]
    interval: float = WidgetConstants.DEFAULT_FRAME_INTERVAL


# Built once at import and read-only afterwards.
SPINNER_STYLES: Mapping[str, SpinnerStyle] = MappingProxyType({
    "FingerDance": SpinnerStyle(("🤘 ", "🤟 ", "🖖 ", "✋ ", "🤚 ", "👆 ", "👌 ")),
    "Line": SpinnerStyle(("|", "/", "-", "\\"), 0.1),
    "Dot": SpinnerStyle(("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ "), 0.1),
    "MiniDot": SpinnerStyle(("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), 0.083),
    "Jump": SpinnerStyle(("⢄", "⢂", "⢁", "⡁", "⡈", "⡐", "⡠"), 0.1),
    "Pulse": SpinnerStyle(("█", "▓", "▒", "░"), 0.125),
    "Points": SpinnerStyle(("∙∙∙", "●∙∙", "∙●∙", "∙∙●"), 0.142),
    "Globe": SpinnerStyle(("🌍", "🌎", "🌏"), 0.25),
    "Moon": SpinnerStyle(("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘"), 0.125),
    "Monkey": SpinnerStyle(("🙈", "🙉", "🙊"), 0.333),
    "Meter": SpinnerStyle(("▱▱▱", "▰▱▱", "▰▰▱", "▰▰▰", "▰▰▱", "▰▱▱", "▱▱▱"), 0.142),
    "Hamburger": SpinnerStyle(("☱", "☲", "☴", "☲"), 0.333),
})


def get_style(name: str, styles: Mapping[str, SpinnerStyle] = SPINNER_STYLES) -> SpinnerStyle:
    """Look up a spinner style by name.

    Raises:
        ConfigurationError: If the name is not in ``styles``.
    """
    try:
        return styles[name]
    except KeyError:
        known = ", ".join(sorted(styles))
        raise ConfigurationError(f"Unknown spinner style {name!r}; choose one of: {known}") from None


class IndicatorState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass(frozen=True)
class FrameAdvanced:
    """Posted by the background clock after each frame change."""
    indicator_id: int
    frame_index: int


_indicator_ids = itertools.count(1)


class TickingIndicator:
    """Cyclic frame index driven by a daemon thread.

    ``start()`` and ``stop()`` are idempotent. ``stop()`` only asks the
    thread to finish: it exits at its next tick, so one more frame may
    still be posted after ``stop()`` returns. Use ``join()`` to wait.

    Args:
        frames: Non-empty sequence of display strings.
        frame_interval: Seconds between frames (> 0).
        events: Queue receiving FrameAdvanced events, if any.
        wakeup: Called from the background thread after each frame.
    """

    def __init__(self, frames: Sequence[str], frame_interval: float,
                 events: Optional["queue.Queue[FrameAdvanced]"] = None,
                 wakeup: Optional[Callable[[], None]] = None):
        if not frames:
            raise ConfigurationError("A ticking indicator needs at least one frame")
        if frame_interval <= 0:
            raise ConfigurationError(f"frame_interval must be positive, got {frame_interval}")
        self.frames = tuple(frames)
        self.frame_interval = frame_interval
        self.events = events
        self.wakeup = wakeup
        self.id = next(_indicator_ids)
        self._running = threading.Event()
        self._lock = threading.Lock()
        self._frame_index = 0
        self._stop_requested: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> IndicatorState:
        return IndicatorState.RUNNING if self._running.is_set() else IndicatorState.STOPPED

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def current_frame_index(self) -> int:
        with self._lock:
            return self._frame_index

    @property
    def current_frame(self) -> str:
        return self.frames[self.current_frame_index]

    def start(self) -> None:
        with self._lock:
            if self._running.is_set():
                return
            # Each run gets its own stop flag so a previous thread that has
            # not noticed its stop yet cannot be revived by a restart.
            stop_requested = threading.Event()
            self._stop_requested = stop_requested
            self._running.set()
            self._thread = threading.Thread(
                target=self._run, args=(stop_requested,),
                name=f"ticking-indicator-{self.id}", daemon=True,
            )
            self._thread.start()
        logger.debug("indicator %d started", self.id)

    def stop(self) -> None:
        with self._lock:
            if not self._running.is_set():
                return
            self._running.clear()
            if self._stop_requested is not None:
                self._stop_requested.set()
        logger.debug("indicator %d stop requested", self.id)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the background thread to exit; True if it has."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def advance(self) -> int:
        """Move to the next frame and return its index."""
        with self._lock:
            self._frame_index = (self._frame_index + 1) % len(self.frames)
            return self._frame_index

    def _run(self, stop_requested: threading.Event) -> None:
        while not stop_requested.wait(self.frame_interval):
            index = self.advance()
            if self.events is not None:
                self.events.put(FrameAdvanced(self.id, index))
            if self.wakeup is not None:
                try:
                    self.wakeup()
                except OSError as e:
                    logger.warning(f"Spinner wakeup failed, stopping clock: {e}")
                    break
        with self._lock:
            if self._stop_requested is stop_requested:
                self._running.clear()
        logger.debug("indicator %d clock exited", self.id)


class Spinner:
    """Animated frame followed by a message."""

    def __init__(self, message: str, style: str = WidgetConstants.DEFAULT_SPINNER_STYLE,
                 color: Optional[RGB] = None,
                 styles: Mapping[str, SpinnerStyle] = SPINNER_STYLES,
                 frame_interval: Optional[float] = None):
        spinner_style = get_style(style, styles)
        self.message = message
        self.style_name = style
        self.color = color
        interval = frame_interval if frame_interval is not None else spinner_style.interval
        self.indicator = TickingIndicator(spinner_style.frames, interval)

    def attach(self, events: "queue.Queue[FrameAdvanced]",
               wakeup: Optional[Callable[[], None]] = None) -> None:
        """Route frame events to an event loop. Call before start()."""
        self.indicator.events = events
        self.indicator.wakeup = wakeup

    def start(self) -> None:
        self.indicator.start()

    def stop(self) -> None:
        self.indicator.stop()

    @property
    def running(self) -> bool:
        return self.indicator.running

    def render(self) -> Frame:
        frame = Frame()
        frame.add_line(Span(self.indicator.current_frame, color=self.color),
                       Span(self.message, color=self.color))
        return frame
