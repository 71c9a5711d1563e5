"""
Decoding of raw terminal input into key presses.

Escape sequences cover the common xterm, rxvt, linux console and tmux
variants, in both normal and application cursor mode.
"""

from .events import Key, KeyPress, Modifier

ESC = "\x1b"
CSI = ESC + "["

_ESCAPE_SEQUENCES: dict[str, KeyPress] = {
    # Arrow keys
    "\x1b[A": KeyPress(Key.UP),
    "\x1bOA": KeyPress(Key.UP),
    "\x1b[B": KeyPress(Key.DOWN),
    "\x1bOB": KeyPress(Key.DOWN),
    "\x1b[C": KeyPress(Key.RIGHT),
    "\x1bOC": KeyPress(Key.RIGHT),
    "\x1b[D": KeyPress(Key.LEFT),
    "\x1bOD": KeyPress(Key.LEFT),
    # Home / End
    "\x1b[H": KeyPress(Key.HOME),
    "\x1bOH": KeyPress(Key.HOME),
    "\x1b[1~": KeyPress(Key.HOME),
    "\x1b[7~": KeyPress(Key.HOME),
    "\x1b[F": KeyPress(Key.END),
    "\x1bOF": KeyPress(Key.END),
    "\x1b[4~": KeyPress(Key.END),
    "\x1b[8~": KeyPress(Key.END),
    # Editing block
    "\x1b[2~": KeyPress(Key.INSERT),
    "\x1b[3~": KeyPress(Key.DELETE),
    "\x1b[5~": KeyPress(Key.PAGE_UP),
    "\x1b[6~": KeyPress(Key.PAGE_DOWN),
    # Shift+Tab
    "\x1b[Z": KeyPress(Key.BACK_TAB, frozenset({Modifier.SHIFT})),
    # Function keys
    "\x1bOP": KeyPress(Key.F1),
    "\x1bOQ": KeyPress(Key.F2),
    "\x1bOR": KeyPress(Key.F3),
    "\x1bOS": KeyPress(Key.F4),
    "\x1b[11~": KeyPress(Key.F1),
    "\x1b[12~": KeyPress(Key.F2),
    "\x1b[13~": KeyPress(Key.F3),
    "\x1b[14~": KeyPress(Key.F4),
    "\x1b[15~": KeyPress(Key.F5),
    "\x1b[17~": KeyPress(Key.F6),
    "\x1b[18~": KeyPress(Key.F7),
    "\x1b[19~": KeyPress(Key.F8),
    "\x1b[20~": KeyPress(Key.F9),
    "\x1b[21~": KeyPress(Key.F10),
    "\x1b[23~": KeyPress(Key.F11),
    "\x1b[24~": KeyPress(Key.F12),
}

_PREFIXES = frozenset(seq[:i] for seq in _ESCAPE_SEQUENCES for i in range(1, len(seq)))

_SINGLE_KEYS = {
    "\r": KeyPress(Key.ENTER),
    "\n": KeyPress(Key.ENTER),
    "\t": KeyPress(Key.TAB),
    "\x7f": KeyPress(Key.BACKSPACE),
    "\b": KeyPress(Key.BACKSPACE),
    ESC: KeyPress(Key.ESC),
}


def is_sequence_prefix(seq: str) -> bool:
    """Return True if more input could still complete an escape sequence."""
    if seq in _PREFIXES:
        return True
    # Unknown CSI sequences run until a final byte in @..~
    return seq.startswith(CSI) and (seq == CSI or not "@" <= seq[-1] <= "~")


def decode(seq: str) -> KeyPress | None:
    """
    Decode one raw input sequence into a KeyPress.

    Args:
        seq: A single character, or an escape sequence starting with ESC

    Returns:
        The decoded KeyPress, or None if the sequence is not a known key
    """
    if not seq:
        return None

    if seq in _SINGLE_KEYS:
        return _SINGLE_KEYS[seq]

    if seq in _ESCAPE_SEQUENCES:
        return _ESCAPE_SEQUENCES[seq]

    if seq[0] == ESC:
        # ESC + printable char is how terminals report Alt+char
        rest = seq[1:]
        if len(rest) == 1 and rest.isprintable():
            return KeyPress.char(rest, Modifier.ALT)
        return None

    if len(seq) != 1:
        return None

    code = ord(seq)
    if 1 <= code <= 26:
        return KeyPress.char(chr(code + ord("a") - 1), Modifier.CTRL)
    if seq.isprintable():
        return KeyPress.char(seq)
    return None
