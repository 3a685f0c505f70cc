"""Dashboard main loop."""

import curses
import logging
from typing import Optional

from marketline.app_context import AppContext
from marketline.domain.models import Key
from marketline.ui.keys import KeyEvent, translate
from marketline.ui.line_editor import LineEditor
from marketline.ui.quote_table import QuoteTableRenderer
from marketline.ui.screen import CursesScreen

logger = logging.getLogger(__name__)

# getch() timeout; bounds how late a finished fetch is noticed
INPUT_TIMEOUT_MS = 100


class DashboardApp:
    """
    Terminal dashboard: market rows, ticker table and the line editor.

    Runs on one thread. Keys go to the line editor while it is active;
    otherwise '+' / '-' open it, 'r' refreshes and 'q' or Esc quits.
    Fetches run on the refresher's worker and are published from here.
    """

    def __init__(self, context: AppContext, window: "curses.window"):
        self._context = context
        self._window = window
        self.screen = CursesScreen(window)
        self.renderer = QuoteTableRenderer(
            self.screen,
            market_data=context.market_data,
            ticker_set=context.ticker_set,
        )
        self.editor = LineEditor(
            self.screen,
            context.ticker_set,
            self.renderer,
            on_change=self._on_tickers_changed,
        )

    def run(self) -> None:
        """Run until the user quits."""
        self._window.keypad(True)
        self._window.timeout(INPUT_TIMEOUT_MS)
        self.screen.hide_cursor()
        self._redraw()

        refresher = self._context.refresher
        while True:
            refresher.tick()
            if refresher.poll():
                self._redraw()

            key = self._read_key()
            if key is None:
                continue
            if key == curses.KEY_RESIZE:
                self._window.clear()
                self._redraw()
                continue

            if not self.handle(translate(key)):
                break

        logger.info("Dashboard stopped")

    def handle(self, event: KeyEvent) -> bool:
        """Dispatch one key. Returns False when the user asked to quit."""
        if self.editor.is_active:
            self.editor.handle(event)
            return True

        if event.key is Key.ESCAPE:
            return False
        if event.key is Key.CHAR:
            if event.ch in ("+", "-"):
                self.editor.prompt(event.ch)
            elif event.ch in ("q", "Q"):
                return False
            elif event.ch in ("r", "R"):
                self._context.refresher.refresh_now()
        return True

    def _on_tickers_changed(self) -> None:
        self._context.refresher.refresh_now()

    def _redraw(self) -> None:
        self.renderer.draw()
        self.editor.restore_cursor()
        self.screen.flush()

    def _read_key(self) -> Optional[object]:
        try:
            return self._window.get_wch()
        except curses.error:
            # Timeout with no input
            return None


def run_dashboard(context: AppContext) -> None:
    """Run the dashboard inside curses.wrapper, restoring the terminal on exit."""

    def _main(window: "curses.window") -> None:
        DashboardApp(context, window).run()

    curses.wrapper(_main)
