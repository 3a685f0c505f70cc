"""
Single-line ticker editor.

The state machine is pure: each transition takes an EditorState and
returns the next state plus the redraw operations it needs. LineEditor
applies those operations to a Screen and runs the add/remove commit.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol, Union

from marketline.domain.models import EditCommand, EditorMode, Key
from marketline.services.ticker_set import TickerSet
from marketline.ui.keys import KeyEvent
from marketline.ui.screen import PROMPT_ROW, TABLE_HEADER_ROW, Screen

logger = logging.getLogger(__name__)

PROMPTS: dict[EditCommand, str] = {
    EditCommand.ADD: "Add tickers: ",
    EditCommand.REMOVE: "Remove tickers: ",
}

TOKEN_SEPARATOR = re.compile(r"[,\s]+")


# =============================================================================
# REDRAW OPERATIONS
# =============================================================================


@dataclass(frozen=True)
class DrawText:
    column: int
    row: int
    text: str
    style: Optional[str] = None


@dataclass(frozen=True)
class PlaceCursor:
    column: int
    row: int


@dataclass(frozen=True)
class ClearRow:
    row: int
    column: int = 0


@dataclass(frozen=True)
class HideCursor:
    pass


RedrawOp = Union[DrawText, PlaceCursor, ClearRow, HideCursor]


# =============================================================================
# STATE MACHINE
# =============================================================================


@dataclass(frozen=True)
class EditorState:
    """Editor session state; cursor is an index into buffer."""

    mode: EditorMode = EditorMode.IDLE
    command: Optional[EditCommand] = None
    prompt: str = ""
    buffer: str = ""
    cursor: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.cursor <= len(self.buffer):
            raise ValueError(f"Cursor {self.cursor} outside buffer of length {len(self.buffer)}")

    @classmethod
    def idle(cls) -> "EditorState":
        return cls()

    @property
    def is_capturing(self) -> bool:
        return self.mode is EditorMode.CAPTURING

    @property
    def cursor_column(self) -> int:
        """Terminal column of the cursor."""
        return len(self.prompt) + self.cursor


@dataclass(frozen=True)
class Transition:
    state: EditorState
    ops: tuple[RedrawOp, ...] = ()


def _place_cursor(state: EditorState) -> PlaceCursor:
    return PlaceCursor(state.cursor_column, PROMPT_ROW)


def start(state: EditorState, command: Union[EditCommand, str]) -> Transition:
    """Begin capturing for '+' or '-'; anything else is ignored."""
    try:
        command = EditCommand(command)
    except ValueError:
        return Transition(state)
    if state.is_capturing:
        return Transition(state)

    prompt = PROMPTS[command]
    new_state = EditorState(mode=EditorMode.CAPTURING, command=command, prompt=prompt)
    return Transition(
        new_state,
        (DrawText(0, PROMPT_ROW, prompt, "white"), _place_cursor(new_state)),
    )


def insert_character(state: EditorState, ch: str) -> Transition:
    """Splice ch in at the cursor and advance past it."""
    buffer = state.buffer[: state.cursor] + ch + state.buffer[state.cursor :]
    new_state = replace(state, buffer=buffer, cursor=state.cursor + len(ch))
    return Transition(
        new_state,
        (DrawText(len(state.prompt), PROMPT_ROW, buffer), _place_cursor(new_state)),
    )


def delete_previous_character(state: EditorState) -> Transition:
    """Remove the character before the cursor."""
    if state.cursor == 0:
        return Transition(state)

    buffer = state.buffer[: state.cursor - 1] + state.buffer[state.cursor :]
    new_state = replace(state, buffer=buffer, cursor=state.cursor - 1)
    # Trailing space blanks the cell the old last character occupied.
    return Transition(
        new_state,
        (DrawText(len(state.prompt), PROMPT_ROW, buffer + " "), _place_cursor(new_state)),
    )


def move_left(state: EditorState) -> Transition:
    if state.cursor == 0:
        return Transition(state)
    new_state = replace(state, cursor=state.cursor - 1)
    return Transition(new_state, (_place_cursor(new_state),))


def move_right(state: EditorState) -> Transition:
    if state.cursor == len(state.buffer):
        return Transition(state)
    new_state = replace(state, cursor=state.cursor + 1)
    return Transition(new_state, (_place_cursor(new_state),))


def jump_to_beginning(state: EditorState) -> Transition:
    new_state = replace(state, cursor=0)
    return Transition(new_state, (_place_cursor(new_state),))


def jump_to_end(state: EditorState) -> Transition:
    new_state = replace(state, cursor=len(state.buffer))
    return Transition(new_state, (_place_cursor(new_state),))


def finish(state: EditorState) -> Transition:
    """End the session: blank the prompt row and hide the cursor."""
    return Transition(EditorState.idle(), (ClearRow(PROMPT_ROW), HideCursor()))


def tokenize(text: str) -> list[str]:
    """Uppercase and split on runs of commas and whitespace."""
    return [token for token in TOKEN_SEPARATOR.split(text.strip().upper()) if token]


_CURSOR_KEYS: dict[Key, Callable[[EditorState], Transition]] = {
    Key.BACKSPACE: delete_previous_character,
    Key.LEFT: move_left,
    Key.RIGHT: move_right,
    Key.HOME: jump_to_beginning,
    Key.END: jump_to_end,
}


# =============================================================================
# CONTROLLER
# =============================================================================


class TableRenderer(Protocol):
    """Redraws the ticker table after the ticker set changes."""

    def draw_table(self) -> None:
        ...


class LineEditor:
    """
    Interactive ticker editor bound to a screen and a ticker set.

    prompt() opens a session; handle() feeds it keys until Enter commits
    or Escape cancels. on_change is called after an add that changed the
    ticker set, so new rows can be fetched right away.
    """

    def __init__(
        self,
        screen: Screen,
        ticker_set: TickerSet,
        renderer: TableRenderer,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._screen = screen
        self._ticker_set = ticker_set
        self._renderer = renderer
        self._on_change = on_change
        self._state = EditorState.idle()

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state.is_capturing

    def prompt(self, command: Union[EditCommand, str]) -> bool:
        """Open an add ('+') or remove ('-') session. Returns is_active."""
        self._apply(start(self._state, command))
        self._screen.flush()
        return self.is_active

    def handle(self, event: KeyEvent) -> bool:
        """
        Process one key.

        Returns True when the session has ended (committed or cancelled).
        """
        if not self.is_active:
            return True

        try:
            if event.key is Key.ESCAPE:
                return self._done()
            if event.key is Key.ENTER:
                self._execute()
                return self._done()

            if event.key is Key.CHAR:
                if len(event.ch) == 1 and event.ch.isprintable():
                    self._apply(insert_character(self._state, event.ch))
            elif event.key in _CURSOR_KEYS:
                self._apply(_CURSOR_KEYS[event.key](self._state))
            return False
        finally:
            self._screen.flush()

    def restore_cursor(self) -> None:
        """Put the cursor back on the prompt after other rows were redrawn."""
        if self.is_active:
            self._apply(Transition(self._state, (_place_cursor(self._state),)))

    def _apply(self, transition: Transition) -> None:
        for op in transition.ops:
            if isinstance(op, DrawText):
                self._screen.draw_line(op.column, op.row, op.text, op.style)
            elif isinstance(op, PlaceCursor):
                self._screen.set_cursor(op.column, op.row)
            elif isinstance(op, ClearRow):
                self._screen.clear_line(op.column, op.row)
            elif isinstance(op, HideCursor):
                self._screen.hide_cursor()
        self._state = transition.state

    def _done(self) -> bool:
        self._apply(finish(self._state))
        return True

    def _execute(self) -> None:
        tickers = tokenize(self._state.buffer)
        if not tickers:
            return

        if self._state.command is EditCommand.ADD:
            if self._ticker_set.add(tickers) > 0:
                self._renderer.draw_table()
                if self._on_change is not None:
                    self._on_change()

        elif self._state.command is EditCommand.REMOVE:
            before = len(self._ticker_set)
            removed = self._ticker_set.remove(tickers)
            if removed > 0:
                self._renderer.draw_table()
                after = before - removed
                # Rows of tickers that no longer exist
                for i in range(before, after, -1):
                    self._screen.clear_line(0, i + TABLE_HEADER_ROW)
                if after == 0:
                    self._screen.clear_line(0, TABLE_HEADER_ROW)
        logger.debug("Executed %s with %d token(s)", self._state.command, len(tickers))
