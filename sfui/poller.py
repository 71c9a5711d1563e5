"""
Event poller: merges keyboard input and a fixed-rate tick into one channel.

The poller is the only reader of terminal input in the process and runs on
its own daemon thread. Each pass waits for input no longer than the time
left until the next tick, so ticks keep a steady rate whether or not keys
are pressed.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol

from .channel import Channel
from .events import TICK, Event, InputEvent, KeyPress
from .exceptions import ChannelClosed, PollerError

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 0.2  # seconds

# Held by the running poller: only one thread may read terminal input
_reader_lock = threading.Lock()


class InputSource(Protocol):
    def poll(self, timeout: float) -> bool: ...

    def read_key(self) -> KeyPress | None: ...


class EventPoller:
    """
    Background producer of InputEvent and TickEvent values.

    Attributes:
        source: Terminal input (readiness + key reads)
        channel: Channel the merged events are sent on
        tick_rate: Seconds between ticks
    """

    def __init__(
        self,
        source: InputSource,
        channel: Channel[Event],
        tick_rate: float = DEFAULT_TICK_RATE,
        clock: Callable[[], float] = time.monotonic,
    ):
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.source = source
        self.channel = channel
        self.tick_rate = tick_rate
        self._clock = clock
        self._last_tick = clock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> None:
        """
        Run one polling pass.

        Raises:
            TerminalError: If readiness or reading fails
            ChannelClosed: If the consumer has closed the channel
        """
        elapsed = self._clock() - self._last_tick
        timeout = max(0.0, self.tick_rate - elapsed)

        if self.source.poll(timeout):
            key = self.source.read_key()
            if key is not None:
                self.channel.send(InputEvent(key))

        if self._clock() - self._last_tick >= self.tick_rate:
            self.channel.send(TICK)
            self._last_tick = self._clock()

    def run(self) -> None:
        """Poll until stopped, the consumer goes away, or input fails."""
        self._last_tick = self._clock()
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except ChannelClosed:
                logger.debug("Event channel closed by consumer; poller exiting")
                return
            except Exception as e:
                # Every source failure is handed to the loop
                logger.error(f"Event poller failed: {e!r}")
                self.channel.fail(e)
                return

    def _run_exclusive(self) -> None:
        try:
            self.run()
        finally:
            _reader_lock.release()
            logger.debug("Event poller stopped")

    def start(self) -> threading.Thread:
        """
        Start polling on a daemon thread.

        Raises:
            PollerError: If a poller is already reading terminal input
        """
        if not _reader_lock.acquire(blocking=False):
            raise PollerError("another event poller is already reading terminal input")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_exclusive, name="sfui-poller", daemon=True)
        try:
            self._thread.start()
        except RuntimeError:
            _reader_lock.release()
            raise
        logger.debug(f"Event poller started (tick_rate={self.tick_rate:.3f}s)")
        return self._thread

    def stop(self) -> None:
        """Ask the poller to exit after its current pass."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)
