"""termwidgets - interactive terminal widgets."""

from .collection import SelectableCollection
from .errors import ConfigurationError
from .frame import Frame, Span
from .item_list import Item, ItemList
from .menu import Menu, MenuItem
from .progress_bar import ProgressBar
from .scroll import adjust_offset
from .spinner import SPINNER_STYLES, FrameAdvanced, Spinner, SpinnerStyle, TickingIndicator
from .table import Table
from .text_area import CursorPosition, TextArea, TextEditBuffer
from .text_input import TextInput
from .timers import StopWatch, Timer, format_duration
from .viewport import ContentScroller, Viewport

__all__ = [
    'ConfigurationError',
    'ContentScroller',
    'CursorPosition',
    'Frame',
    'FrameAdvanced',
    'Item',
    'ItemList',
    'Menu',
    'MenuItem',
    'ProgressBar',
    'SPINNER_STYLES',
    'SelectableCollection',
    'Span',
    'Spinner',
    'SpinnerStyle',
    'StopWatch',
    'Table',
    'TextArea',
    'TextEditBuffer',
    'TextInput',
    'TickingIndicator',
    'Timer',
    'Viewport',
    'adjust_offset',
    'format_duration',
]
