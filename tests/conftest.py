"""Pytest configuration and shared fakes for the `tests/` suite.

The package lives at the repository root; when the suite runs from a plain
checkout (no editable install) we put the root on `sys.path` so `import sfui`
resolves.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path

import pytest


def _prepend_sys_path(path: Path) -> None:
    if not path.exists() or not path.is_dir():
        return

    path_str = str(path.resolve())
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


_REPO_ROOT = Path(__file__).resolve().parents[1]
_prepend_sys_path(_REPO_ROOT)

from sfui.events import KeyPress  # noqa: E402
from sfui.terminal import Frame, Rect  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedInput:
    """Input source that replays key presses at fixed times on a FakeClock.

    poll() "waits" by advancing the clock: to the next key's timestamp if it
    falls inside the timeout, otherwise by the whole timeout.
    """

    def __init__(self, clock: FakeClock, keys: list[tuple[float, KeyPress]] | None = None):
        self.clock = clock
        self.pending = sorted(keys or [], key=lambda item: item[0])
        self.timeouts: list[float] = []

    def poll(self, timeout: float) -> bool:
        self.timeouts.append(timeout)
        if self.pending and self.pending[0][0] <= self.clock.now + timeout:
            self.clock.now = max(self.clock.now, self.pending[0][0])
            return True
        self.clock.advance(timeout)
        return False

    def read_key(self) -> KeyPress | None:
        return self.pending.pop(0)[1]


class FakeTerminal:
    """Terminal double recording mode changes and drawn frames."""

    def __init__(self, size: Rect = Rect(0, 0, 40, 12)):
        self.size = size
        self.raw_mode = False
        self.cursor_visible = True
        self.clears = 0
        self.frames: list[Frame] = []
        self.calls: list[str] = []

    @contextmanager
    def session(self):
        self.raw_mode = True
        self.cursor_visible = False
        self.clears += 1
        self.calls.append("enter")
        try:
            yield self
        finally:
            self.raw_mode = False
            self.cursor_visible = True
            self.calls.append("exit")

    def draw(self, renderer) -> None:
        frame = Frame(self.size)
        renderer(frame)
        self.frames.append(frame)
        self.calls.append("draw")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_terminal():
    return FakeTerminal()
