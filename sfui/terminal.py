"""
Terminal session: raw input mode, keyboard readiness and the drawing surface.

Input is read straight from the stdin descriptor (POSIX termios/select);
output goes through a rich Live display on the alternate screen, refreshed
only when the render loop draws a frame.
"""

import codecs
import logging
import os
import select
import sys
import termios
import tty
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TextIO

from rich.console import Console, RenderableType
from rich.live import Live
from rich.padding import Padding
from rich.text import Text

from .events import KeyPress
from .exceptions import TerminalError
from .keys import ESC, decode, is_sequence_prefix

logger = logging.getLogger(__name__)

# Inter-byte wait used to tell a lone Esc from the start of an escape sequence
ESCAPE_TIMEOUT = 0.01
MAX_SEQUENCE_LENGTH = 16


@dataclass(frozen=True)
class Rect:
    """A rectangular area of the screen, in character cells"""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, margin: int) -> "Rect":
        """Shrink the area by `margin` cells on every side."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + margin, self.y + margin, width, height)


class Frame:
    """
    Drawing surface handed to a frame renderer for one frame.

    A frame carries a single root widget placed at an area of the viewport.
    """

    def __init__(self, size: Rect):
        self.size = size
        self._widget: RenderableType | None = None
        self._area: Rect | None = None

    def render_widget(self, widget: RenderableType, area: Rect | None = None) -> None:
        self._widget = widget
        self._area = area if area is not None else self.size

    @property
    def renderable(self) -> RenderableType:
        """The widget padded into position within the viewport."""
        area = self._area
        if self._widget is None or area is None or area.is_empty:
            return Text("")
        pad = (
            max(0, area.y - self.size.y),
            max(0, self.size.right - area.right),
            max(0, self.size.bottom - area.bottom),
            max(0, area.x - self.size.x),
        )
        return Padding(self._widget, pad, expand=True)


FrameRenderer = Callable[[Frame], None]


class TerminalSession:
    """
    The process terminal.

    Raw mode is process-wide state; use session() so it is always restored.
    """

    def __init__(self, console: Console | None = None, stdin: TextIO | None = None):
        self.console = console or Console()
        self._stdin = stdin or sys.stdin
        self._fd: int | None = None
        self._saved_attrs: list | None = None
        self._live: Live | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        # Character read ahead while gathering an escape sequence
        self._pending = ""

    @property
    def raw_mode(self) -> bool:
        return self._saved_attrs is not None

    @property
    def size(self) -> Rect:
        width, height = self.console.size
        return Rect(0, 0, width, height)

    def _fileno(self) -> int:
        if self._fd is not None:
            return self._fd
        try:
            return self._stdin.fileno()
        except (AttributeError, ValueError, OSError) as e:
            raise TerminalError(f"stdin has no file descriptor: {e}") from e

    # ------------------------------------------------------------------ mode
    def enable_raw_mode(self) -> None:
        """Turn off line buffering and echo for stdin."""
        if self._saved_attrs is not None:
            return
        fd = self._fileno()
        if not os.isatty(fd):
            raise TerminalError("cannot run in raw mode: stdin is not a terminal")
        try:
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except termios.error as e:
            self._saved_attrs = None
            raise TerminalError(f"cannot run in raw mode: {e}") from e
        self._fd = fd
        logger.debug("Raw mode enabled")

    def disable_raw_mode(self) -> None:
        """Restore the terminal attributes saved by enable_raw_mode()."""
        if self._saved_attrs is None:
            return
        attrs, self._saved_attrs = self._saved_attrs, None
        try:
            termios.tcsetattr(self._fileno(), termios.TCSADRAIN, attrs)
        except termios.error as e:
            raise TerminalError(f"cannot restore terminal mode: {e}") from e
        logger.debug("Raw mode disabled")

    # ----------------------------------------------------------------- input
    def poll(self, timeout: float) -> bool:
        """Wait up to `timeout` seconds for input; return True if it is ready."""
        if self._pending:
            return True
        fd = self._fileno()
        try:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout))
        except (OSError, ValueError) as e:
            raise TerminalError(f"polling is broken: {e}") from e
        return bool(ready)

    def _read_char(self) -> str:
        if self._pending:
            ch, self._pending = self._pending, ""
            return ch
        fd = self._fileno()
        while True:
            try:
                data = os.read(fd, 1)
            except OSError as e:
                raise TerminalError(f"cannot read events: {e}") from e
            if not data:
                raise TerminalError("cannot read events: end of input")
            ch = self._decoder.decode(data)
            if ch:
                return ch

    def read_key(self) -> KeyPress | None:
        """
        Read one key from stdin.

        Call after poll() reported readiness. Escape sequences are gathered
        while further bytes arrive within ESCAPE_TIMEOUT.

        Returns:
            The key, or None for input that is not a recognised key
        """
        seq = self._read_char()
        if seq == ESC:
            while (
                len(seq) < MAX_SEQUENCE_LENGTH
                and (seq == ESC or is_sequence_prefix(seq))
                and self.poll(ESCAPE_TIMEOUT)
            ):
                ch = self._read_char()
                if ch == ESC:
                    # A second ESC starts the next key
                    self._pending = ch
                    break
                seq += ch
        key = decode(seq)
        if key is None:
            logger.debug(f"Ignoring unrecognised input {seq!r}")
        return key

    # ---------------------------------------------------------------- output
    def clear(self) -> None:
        """Switch to the alternate screen, clear it and hide the cursor."""
        if self._live is None:
            self._live = Live(
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start()
        self.console.clear()

    def draw(self, renderer: FrameRenderer) -> None:
        """Render one full frame."""
        if self._live is None:
            raise TerminalError("screen is not active; call clear() first")
        frame = Frame(self.size)
        renderer(frame)
        try:
            self._live.update(frame.renderable, refresh=True)
        except OSError as e:
            raise TerminalError(f"cannot draw frame: {e}") from e

    def show_cursor(self) -> None:
        """Leave the alternate screen and make the cursor visible again."""
        if self._live is not None:
            live, self._live = self._live, None
            live.stop()
        self.console.show_cursor(True)

    @contextmanager
    def session(self) -> Iterator["TerminalSession"]:
        """
        Hold raw mode and the screen for the duration of the block.

        Raw mode and cursor visibility are restored on every exit path. A
        failed restore is only raised when no other error is propagating.
        """
        self.enable_raw_mode()
        failed = False
        try:
            self.clear()
            yield self
        except BaseException:
            failed = True
            raise
        finally:
            try:
                self.disable_raw_mode()
            except TerminalError as e:
                if not failed:
                    raise
                logger.warning(f"Terminal restore failed during error exit: {e}")
            finally:
                self.show_cursor()
