"""
Event types carried from the poller to the render loop.
"""

from dataclasses import dataclass, field
from enum import Enum


class Modifier(Enum):
    """Modifier keys held during a key press"""

    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"


class Key(str, Enum):
    """Named (non-character) keys"""

    ENTER = "enter"
    TAB = "tab"
    BACK_TAB = "back_tab"
    BACKSPACE = "backspace"
    ESC = "esc"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    INSERT = "insert"
    DELETE = "delete"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


@dataclass(frozen=True)
class KeyPress:
    """A single captured key: a character or a named key, plus modifiers"""

    code: str
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)

    @classmethod
    def char(cls, ch: str, *modifiers: Modifier) -> "KeyPress":
        return cls(ch, frozenset(modifiers))

    @property
    def is_char(self) -> bool:
        return not isinstance(self.code, Key) and len(self.code) == 1

    def __str__(self) -> str:
        code = self.code.value if isinstance(self.code, Key) else repr(self.code)
        names = sorted(m.value for m in self.modifiers)
        return "+".join(names + [code])


@dataclass(frozen=True)
class InputEvent:
    """A key press reported by the terminal"""

    key: KeyPress


@dataclass(frozen=True)
class TickEvent:
    """Heartbeat emitted once per elapsed tick interval"""


TICK = TickEvent()

Event = InputEvent | TickEvent
