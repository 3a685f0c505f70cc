"""Translation of curses input into editor key events."""

import curses
from dataclasses import dataclass
from typing import Union

from marketline.domain.models import Key


@dataclass(frozen=True)
class KeyEvent:
    """A single keypress; ch is set only for Key.CHAR."""

    key: Key
    ch: str = ""

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(Key.CHAR, ch)


_CONTROL_CHARS: dict[str, Key] = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESCAPE,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
    "\x01": Key.HOME,  # Ctrl-A
    "\x05": Key.END,  # Ctrl-E
    "\x02": Key.LEFT,  # Ctrl-B
    "\x06": Key.RIGHT,  # Ctrl-F
}

_SPECIAL_KEYS: dict[int, Key] = {
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
}


def translate(key: Union[int, str]) -> KeyEvent:
    """
    Map a value from window.get_wch() (or getch()) to a KeyEvent.

    Strings are characters, ints are curses key codes; getch() returns
    plain characters as ints too, which are treated as code points.
    """
    if isinstance(key, int):
        if key in _SPECIAL_KEYS:
            return KeyEvent(_SPECIAL_KEYS[key])
        if 0 <= key < 0x110000 and key < curses.KEY_MIN:
            key = chr(key)
        else:
            return KeyEvent(Key.UNKNOWN)

    if key in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[key])
    if len(key) == 1 and key.isprintable():
        return KeyEvent.char(key)
    return KeyEvent(Key.UNKNOWN)
