"""Terminal user interface."""

from marketline.ui.screen import Screen, CursesScreen, PROMPT_ROW, TABLE_HEADER_ROW
from marketline.ui.keys import KeyEvent, translate
from marketline.ui.line_editor import LineEditor, EditorState, tokenize
from marketline.ui.quote_table import QuoteTableRenderer

__all__ = [
    "Screen",
    "CursesScreen",
    "PROMPT_ROW",
    "TABLE_HEADER_ROW",
    "KeyEvent",
    "translate",
    "LineEditor",
    "EditorState",
    "tokenize",
    "QuoteTableRenderer",
]
