"""
Pytest configuration and fixtures for marketline tests.

This module provides:
- A recording Screen that keeps per-row text and every call made
- Quote response body builders
- Deterministic executors and clocks for the refresher
- Service, provider and editor fixtures
"""

import concurrent.futures
import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from marketline.config.settings import Settings, reset_settings
from marketline.domain.models import Credential, Indicator
from marketline.providers import StubQuoteFetcher, YahooQuoteFetcher
from marketline.services import MarketDataService, TickerSet
from marketline.ui.keys import KeyEvent
from marketline.ui.line_editor import LineEditor
from marketline.ui.quote_table import QuoteTableRenderer


# =============================================================================
# SCREEN
# =============================================================================


class RecordingScreen:
    """
    In-memory Screen.

    Keeps the visible text of every row and a log of calls, so tests can
    check both what is on screen and exactly which rows were touched.
    """

    def __init__(self):
        self.rows: dict[int, str] = {}
        self.calls: list[tuple] = []
        self.cursor: Optional[tuple[int, int]] = None
        self.cursor_visible = False
        self.flushes = 0

    def draw_line(self, column: int, row: int, text: str, style: Optional[str] = None) -> None:
        self.calls.append(("draw", column, row, text))
        line = self.rows.get(row, "").ljust(column)
        self.rows[row] = line[:column] + text + line[column + len(text):]

    def clear_line(self, column: int, row: int) -> None:
        self.calls.append(("clear", column, row))
        self.rows[row] = self.rows.get(row, "")[:column]

    def set_cursor(self, column: int, row: int) -> None:
        self.calls.append(("cursor", column, row))
        self.cursor = (column, row)
        self.cursor_visible = True

    def hide_cursor(self) -> None:
        self.calls.append(("hide",))
        self.cursor_visible = False

    def flush(self) -> None:
        self.flushes += 1

    def text(self, row: int) -> str:
        """Visible text of a row without trailing blanks."""
        return self.rows.get(row, "").rstrip()

    def cleared_rows(self) -> list[int]:
        return [call[2] for call in self.calls if call[0] == "clear"]

    def drawn_rows(self) -> list[int]:
        return [call[2] for call in self.calls if call[0] == "draw"]

    def reset_calls(self) -> None:
        self.calls.clear()


def type_text(editor: LineEditor, text: str) -> None:
    """Feed each character of text to the editor."""
    for ch in text:
        editor.handle(KeyEvent.char(ch))


# =============================================================================
# RESPONSE BUILDERS
# =============================================================================


def make_quote_row(
    price: Any = 100.0,
    change: Any = 1.0,
    percent: Any = 1.0,
    symbol: Optional[str] = None,
    **extra: Any,
) -> dict:
    """Build one quoteResponse.result entry."""
    row = {
        "regularMarketPrice": price,
        "regularMarketChange": change,
        "regularMarketChangePercent": percent,
    }
    if symbol is not None:
        row["symbol"] = symbol
    row.update(extra)
    return row


def make_indicator_rows(overrides: Optional[dict[int, dict]] = None) -> list[dict]:
    """One row per Indicator in order; overrides replace rows by position."""
    rows = [
        make_quote_row(price=1000.0 + i, change=float(i), percent=0.1 * i, symbol=indicator.symbol)
        for i, indicator in enumerate(Indicator)
    ]
    for position, row in (overrides or {}).items():
        rows[position] = row
    return rows


def make_body(rows: list[dict]) -> str:
    return json.dumps({"quoteResponse": {"result": rows, "error": None}})


def make_http_response(body: str, status: int = 200) -> MagicMock:
    """Mock requests.Response for a quote call."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.content = body.encode("utf-8")
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    return response


# =============================================================================
# EXECUTORS AND CLOCKS
# =============================================================================


class ImmediateExecutor(concurrent.futures.Executor):
    """Runs submitted work synchronously."""

    def submit(self, fn, /, *args, **kwargs):
        future: concurrent.futures.Future = concurrent.futures.Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class ManualExecutor(concurrent.futures.Executor):
    """Hands out pending futures that tests complete by hand."""

    def __init__(self):
        self.submitted: list[tuple] = []
        self.futures: list[concurrent.futures.Future] = []

    def submit(self, fn, /, *args, **kwargs):
        future: concurrent.futures.Future = concurrent.futures.Future()
        self.submitted.append((fn, args, kwargs))
        self.futures.append(future)
        return future


class FakeClock:
    """Monotonic clock advanced by tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings():
    """Keep the global settings instance from leaking between tests."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings rooted in a temporary data directory."""
    return Settings(data_dir=tmp_path / "data", tickers=[], offline=True)


@pytest.fixture
def credential() -> Credential:
    return Credential(cookie="A3=d=abc", token="crumb123")


@pytest.fixture
def http_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def yahoo_fetcher(settings, http_session) -> YahooQuoteFetcher:
    return YahooQuoteFetcher(settings=settings, session=http_session)


@pytest.fixture
def stub_fetcher() -> StubQuoteFetcher:
    return StubQuoteFetcher(seed=7)


@pytest.fixture
def ticker_set() -> TickerSet:
    return TickerSet()


@pytest.fixture
def market_data() -> MarketDataService:
    return MarketDataService()


@pytest.fixture
def screen() -> RecordingScreen:
    return RecordingScreen()


@pytest.fixture
def renderer(screen, market_data, ticker_set) -> QuoteTableRenderer:
    return QuoteTableRenderer(screen, market_data=market_data, ticker_set=ticker_set)


@pytest.fixture
def table_renderer() -> MagicMock:
    """Renderer double that only counts redraws."""
    return MagicMock(spec=QuoteTableRenderer)


@pytest.fixture
def editor(screen, ticker_set, table_renderer) -> LineEditor:
    return LineEditor(screen, ticker_set, table_renderer)
