"""Screen capability and its curses implementation."""

import curses
from typing import Optional, Protocol

# Fixed dashboard rows
MARKET_ROWS = (0, 1, 2)
PROMPT_ROW = 3
TABLE_HEADER_ROW = 4


class Screen(Protocol):
    """Row-oriented drawing surface used by the editor and renderers."""

    def draw_line(self, column: int, row: int, text: str, style: Optional[str] = None) -> None:
        """Draw text starting at (column, row)."""
        ...

    def clear_line(self, column: int, row: int) -> None:
        """Blank the row from column to the right edge."""
        ...

    def set_cursor(self, column: int, row: int) -> None:
        """Show the terminal cursor at (column, row)."""
        ...

    def hide_cursor(self) -> None:
        ...

    def flush(self) -> None:
        """Push pending changes to the terminal."""
        ...


class CursesScreen:
    """
    Screen backed by a curses window.

    Writes are clipped to the window; curses raises when the last cell
    of the window is written, which is ignored.
    """

    STYLES = ("white", "green", "red", "yellow", "cyan")

    def __init__(self, window: "curses.window"):
        self._window = window
        self._attrs: dict[str, int] = {"bold": curses.A_BOLD}
        self._init_colors()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        colors = {
            "white": curses.COLOR_WHITE,
            "green": curses.COLOR_GREEN,
            "red": curses.COLOR_RED,
            "yellow": curses.COLOR_YELLOW,
            "cyan": curses.COLOR_CYAN,
        }
        for pair, name in enumerate(self.STYLES, start=1):
            curses.init_pair(pair, colors[name], background)
            self._attrs[name] = curses.color_pair(pair)

    def draw_line(self, column: int, row: int, text: str, style: Optional[str] = None) -> None:
        height, width = self._window.getmaxyx()
        if row >= height or column >= width:
            return
        attr = self._attrs.get(style, curses.A_NORMAL) if style else curses.A_NORMAL
        try:
            self._window.addstr(row, column, text[: width - column], attr)
        except curses.error:
            pass

    def clear_line(self, column: int, row: int) -> None:
        height, width = self._window.getmaxyx()
        if row >= height or column >= width:
            return
        self._window.move(row, column)
        self._window.clrtoeol()

    def set_cursor(self, column: int, row: int) -> None:
        height, width = self._window.getmaxyx()
        self._set_visibility(1)
        self._window.move(min(row, height - 1), min(column, width - 1))

    def hide_cursor(self) -> None:
        self._set_visibility(0)

    def flush(self) -> None:
        self._window.refresh()

    @staticmethod
    def _set_visibility(visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            # Terminal does not support cursor visibility changes
            pass
