"""Ready-made widgets for the demo CLI.

Each builder takes the user settings and returns a controller ready to be
run by :class:`~termwidgets.app.WidgetApp`.
"""

from typing import Callable, Dict

from .config import WidgetSettings
from .controllers import (
    ItemListController,
    MenuController,
    ProgressController,
    SpinnerController,
    StopWatchController,
    TableController,
    TextAreaController,
    TextInputController,
    TimerController,
    ViewportController,
    WidgetController,
)
from .item_list import Item, ItemList
from .menu import Menu
from .progress_bar import ProgressBar
from .spinner import Spinner
from .table import Table
from .text_area import TextArea
from .text_input import TextInput
from .timers import StopWatch, Timer
from .viewport import Viewport

GROCERIES = [
    Item("Pocky", "Expensive"),
    Item("Ginger", "Exquisite"),
    Item("Coke", "Cheap"),
    Item("Sprite", "Cheap"),
    Item("Bitcoin", "Volatile"),
    Item("Matcha", "Earthy"),
    Item("Ramune", "Fizzy"),
]

CITIES_HEADERS = ["Rank", "City", "Country", "Population"]
CITIES = [
    ["1", "Tokyo", "Japan", "37,274,000"],
    ["2", "Delhi", "India", "32,065,760"],
    ["3", "Shanghai", "China", "28,516,904"],
    ["4", "Dhaka", "Bangladesh", "22,478,116"],
    ["5", "São Paulo", "Brazil", "22,429,800"],
    ["6", "Mexico City", "Mexico", "22,085,140"],
    ["7", "Cairo", "Egypt", "21,750,020"],
    ["8", "Beijing", "China", "21,333,332"],
    ["9", "Mumbai", "India", "20,961,472"],
    ["10", "Osaka", "Japan", "19,059,856"],
]

POEM = """\
The Road Not Taken

Two roads diverged in a yellow wood, And sorry I could not travel both \
And be one traveler, long I stood And looked down one as far as I could \
To where it bent in the undergrowth;

Then took the other, as just as fair, And having perhaps the better claim, \
Because it was grassy and wanted wear; Though as for that the passing there \
Had worn them really about the same,

And both that morning equally lay In leaves no step had trodden black. \
Oh, I kept the first for another day! Yet knowing how way leads on to way, \
I doubted if I should ever come back.

I shall be telling this with a sigh Somewhere ages and ages hence: \
Two roads diverged in a wood, and I, I took the one less traveled by, \
And that has made all the difference.

Robert Frost"""

SPINNER_COLOR = (0, 255, 255)
TIMER_SECONDS = 5.0


def list_demo(settings: WidgetSettings) -> WidgetController:
    return ItemListController(
        ItemList("Groceries", GROCERIES, window_size=settings.get('list_window_size'))
    )


def menu_demo(settings: WidgetSettings) -> WidgetController:
    options = [f"Option {n}" for n in range(1, 5)]
    return MenuController(Menu("Main Menu", "Pick one, ctrl+t marks it", options))


def table_demo(settings: WidgetSettings) -> WidgetController:
    return TableController(
        Table(CITIES_HEADERS, CITIES, visible_lines=settings.get('table_visible_rows'))
    )


def textarea_demo(settings: WidgetSettings) -> WidgetController:
    return TextAreaController(TextArea("Type here:", "Tab submits, Esc exits."))


def input_demo(settings: WidgetSettings) -> WidgetController:
    return TextInputController(TextInput(
        placeholder="Type here...",
        padding=2,
        initial_text="Hello, World!",
        label="Enter text:",
        helper="Ctrl+C to exit",
        prefix=">",
    ))


def viewport_demo(settings: WidgetSettings) -> WidgetController:
    viewport = Viewport("poem.md", POEM, height=12, width=60,
                        padding=settings.get('viewport_padding'))
    return ViewportController(viewport, mouse_scroll=settings.get('mouse_scroll'))


def spinner_demo(settings: WidgetSettings) -> WidgetController:
    spinner = Spinner("Loading... Please wait.", style=settings.get('spinner_style'),
                      color=SPINNER_COLOR, frame_interval=settings.frame_interval)
    return SpinnerController(spinner)


def progress_demo(settings: WidgetSettings) -> WidgetController:
    return ProgressController(
        ProgressBar("Downloading", length=settings.get('progress_bar_length'))
    )


def stopwatch_demo(settings: WidgetSettings) -> WidgetController:
    return StopWatchController(StopWatch())


def timer_demo(settings: WidgetSettings) -> WidgetController:
    return TimerController(Timer(TIMER_SECONDS))


DEMOS: Dict[str, Callable[[WidgetSettings], WidgetController]] = {
    'list': list_demo,
    'menu': menu_demo,
    'table': table_demo,
    'textarea': textarea_demo,
    'input': input_demo,
    'viewport': viewport_demo,
    'spinner': spinner_demo,
    'progress': progress_demo,
    'stopwatch': stopwatch_demo,
    'timer': timer_demo,
}
