from .app import App, Control, dispatch, run
from .channel import Channel
from .events import TICK, InputEvent, Key, KeyPress, Modifier, TickEvent
from .poller import DEFAULT_TICK_RATE, EventPoller

__version__ = "0.1.0"

# "main" lives in sfui.cli so importing the package stays free of argparse setup
__all__ = [
    "App",
    "Channel",
    "Control",
    "DEFAULT_TICK_RATE",
    "EventPoller",
    "InputEvent",
    "Key",
    "KeyPress",
    "Modifier",
    "TICK",
    "TickEvent",
    "dispatch",
    "run",
]
