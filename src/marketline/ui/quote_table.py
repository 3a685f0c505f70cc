"""Rendering of the market rows and the ticker table."""

from typing import Optional

from marketline.domain.models import Indicator
from marketline.domain.views import IndicatorRecord, MarketSnapshot, TickerQuote
from marketline.services.market_data_service import MarketDataService
from marketline.services.ticker_set import TickerSet
from marketline.ui.screen import MARKET_ROWS, TABLE_HEADER_ROW, Screen

# Indicators drawn on each market row
MARKET_LAYOUT: tuple[tuple[Indicator, ...], ...] = (
    (Indicator.DOW, Indicator.NASDAQ, Indicator.SP500, Indicator.BITCOIN),
    (Indicator.TOKYO, Indicator.HONG_KONG, Indicator.LONDON, Indicator.FRANKFURT),
    (
        Indicator.TEN_YEAR_YIELD,
        Indicator.EURO,
        Indicator.YEN,
        Indicator.POUND,
        Indicator.RUBLE,
        Indicator.GOLD,
        Indicator.SILVER,
    ),
)

TABLE_HEADER = f"{'Ticker':<10}{'Last':>12}{'Change':>12}{'Change%':>10}"


def _change_style(change: str) -> Optional[str]:
    if not change:
        return None
    return "red" if change.startswith("-") else "green"


def format_indicator(record: IndicatorRecord) -> str:
    if not record.latest:
        return f"{record.name} -"
    return f"{record.name} {record.latest} {record.change} ({record.percent})"


def format_ticker_row(symbol: str, quote: Optional[TickerQuote]) -> str:
    if quote is None:
        return f"{symbol:<10}{'-':>12}{'-':>12}{'-':>10}"
    return f"{symbol:<10}{quote.latest:>12}{quote.change:>12}{quote.percent:>10}"


class QuoteTableRenderer:
    """
    Draws the three market rows and the ticker table.

    The table header sits on TABLE_HEADER_ROW and is only drawn while
    there is at least one ticker; ticker i goes on the row below it.
    """

    def __init__(self, screen: Screen, market_data: MarketDataService, ticker_set: TickerSet):
        self._screen = screen
        self._market_data = market_data
        self._ticker_set = ticker_set

    def draw(self) -> None:
        """Redraw everything except the prompt row."""
        self.draw_market()
        self.draw_table()

    def draw_market(self) -> None:
        snapshot = self._market_data.snapshot
        for row, indicators in zip(MARKET_ROWS, MARKET_LAYOUT):
            text = "  ".join(format_indicator(snapshot[i]) for i in indicators)
            self._screen.clear_line(0, row)
            self._screen.draw_line(0, row, text)

        healthy, _ = self._market_data.ok()
        status = self._status(snapshot)
        if status:
            # Status trails the last market row
            self._screen.draw_line(
                len(text) + 2, MARKET_ROWS[-1], status, "cyan" if healthy else "yellow"
            )

    def draw_table(self) -> None:
        symbols = self._ticker_set.symbols()
        if not symbols:
            self._screen.clear_line(0, TABLE_HEADER_ROW)
            return

        snapshot = self._market_data.snapshot
        self._screen.draw_line(0, TABLE_HEADER_ROW, TABLE_HEADER, "bold")
        for offset, symbol in enumerate(symbols, start=1):
            quote = snapshot.quote(symbol)
            row = TABLE_HEADER_ROW + offset
            self._screen.clear_line(0, row)
            self._screen.draw_line(
                0,
                row,
                format_ticker_row(symbol, quote),
                _change_style(quote.change) if quote else None,
            )

    def _status(self, snapshot: MarketSnapshot) -> str:
        healthy, message = self._market_data.ok()
        parts = []
        if snapshot.as_of is not None:
            parts.append(snapshot.as_of.strftime("%H:%M:%S %Z"))
        if snapshot.is_closed:
            parts.append("closed")
        if not healthy:
            parts.append(f"stale {message}".rstrip())
        return " | ".join(parts)
