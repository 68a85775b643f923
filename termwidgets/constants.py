"""Constants and defaults for the termwidgets toolkit."""

class WidgetConstants:
    """Central configuration constants for the widgets."""

    # Spinner
    DEFAULT_SPINNER_STYLE = "FingerDance"
    DEFAULT_FRAME_INTERVAL = 0.12  # Seconds between spinner frames

    # Stopwatch / timer refresh
    CLOCK_TICK_RATE = 0.05  # Seconds between redraws of running clocks

    # Progress bar
    PROGRESS_BAR_LENGTH = 50
    PROGRESS_FILLED_CELL = "▇"
    PROGRESS_START_COLOR = (200, 200, 200)
    PROGRESS_END_COLOR = (255, 140, 0)
    PROGRESS_EMPTY_COLOR = (90, 90, 90)

    # Collections
    LIST_WINDOW_SIZE = 4  # Items visible at once in an ItemList
    MENU_WINDOW_SIZE = 10
    TABLE_VISIBLE_ROWS = 7
    TABLE_CELL_PADDING = 1

    # Viewport
    VIEWPORT_PADDING = 2

    # Text area
    TEXT_AREA_VISIBLE_LINES = 6
    LINE_NUMBER_GUTTER = 5  # Width of "|NNN " before each text area line

    # Help legend
    HELP_SEPARATOR = " • "

    # Mouse wheel reporting (xterm SGR mode)
    MOUSE_REPORTING_ON = "\x1b[?1000h\x1b[?1006h"
    MOUSE_REPORTING_OFF = "\x1b[?1006l\x1b[?1000l"

    # Self-pipe markers used to wake the event loop
    RESIZE_PIPE_MARKER = b'R'
    FRAME_PIPE_MARKER = b'F'
    SIGINT_PIPE_MARKER = b'C'
