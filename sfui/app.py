"""
Render/dispatch loop.

The loop is the single consumer of the merged event stream: it draws a
frame, blocks for the next event, and decides whether to keep going.
"""

import logging
from enum import Enum
from typing import Protocol

from .channel import Channel
from .config import AppConfig
from .events import Event, InputEvent, TickEvent
from .poller import EventPoller
from .terminal import FrameRenderer, TerminalSession
from .widgets import PanelRenderer

logger = logging.getLogger(__name__)

QUIT_KEY = "q"

# How long shutdown waits for the poller thread to notice the stop signal
POLLER_JOIN_TIMEOUT = 0.5


class Control(Enum):
    """Outcome of dispatching one event"""

    CONTINUE = "continue"
    QUIT = "quit"


class Terminal(Protocol):
    def session(self): ...

    def draw(self, renderer: FrameRenderer) -> None: ...


def dispatch(event: Event) -> Control:
    """Map an event to the loop's next step. Only a bare `q` quits."""
    if isinstance(event, InputEvent):
        key = event.key
        if key.code == QUIT_KEY and not key.modifiers:
            return Control.QUIT
        return Control.CONTINUE
    if isinstance(event, TickEvent):
        return Control.CONTINUE
    raise TypeError(f"unexpected event {event!r}")


class App:
    """
    Owns the terminal session and consumes the event channel.

    Every iteration draws exactly one frame before receiving exactly one
    event; redraws are unconditional.
    """

    def __init__(
        self,
        terminal: Terminal,
        channel: Channel[Event],
        renderer: FrameRenderer,
        poller: EventPoller | None = None,
    ):
        self.terminal = terminal
        self.channel = channel
        self.renderer = renderer
        self.poller = poller
        self.draws = 0

    def run(self) -> None:
        """
        Run until the quit key is pressed.

        Any terminal, drawing or channel error propagates to the caller;
        the terminal is restored and the poller stopped either way.
        """
        try:
            with self.terminal.session():
                # Input is only polled once raw mode is on
                if self.poller is not None and not self.poller.running:
                    self.poller.start()
                while True:
                    self.terminal.draw(self.renderer)
                    self.draws += 1
                    event = self.channel.recv()
                    if dispatch(event) is Control.QUIT:
                        logger.info("Quit requested")
                        break
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        self.channel.close()
        if self.poller is not None:
            self.poller.stop()
            self.poller.join(timeout=POLLER_JOIN_TIMEOUT)


def run(config: AppConfig | None = None) -> int:
    """
    Run the poller and the render loop with real terminal I/O.

    Returns:
        Exit code, 0 once the user quits
    """
    config = config or AppConfig()
    config.validate()

    terminal = TerminalSession()
    channel: Channel[Event] = Channel()
    poller = EventPoller(terminal, channel, tick_rate=config.tick_rate)
    app = App(terminal, channel, PanelRenderer.from_config(config), poller=poller)

    app.run()
    logger.debug(f"Loop finished after {app.draws} frames")
    return 0
