"""Stub quote provider for offline/testing use."""

import random
from decimal import Decimal
from typing import Sequence

from marketline.core.timezone import now_eastern
from marketline.domain.models import Credential, Indicator
from marketline.domain.views import (
    YIELD_LABEL,
    FetchResult,
    IndicatorRecord,
    MarketSnapshot,
    TickerQuote,
)
from marketline.providers.decoding import format_number, format_percent


# Deterministic base prices for the indicators
_STUB_INDICATOR_PRICES: dict[Indicator, Decimal] = {
    Indicator.DOW: Decimal("38950.25"),
    Indicator.NASDAQ: Decimal("16274.94"),
    Indicator.SP500: Decimal("5137.08"),
    Indicator.BITCOIN: Decimal("67321.10"),
    Indicator.TOKYO: Decimal("40109.23"),
    Indicator.HONG_KONG: Decimal("16589.44"),
    Indicator.LONDON: Decimal("7682.50"),
    Indicator.FRANKFURT: Decimal("17735.07"),
    Indicator.YEN: Decimal("150.08"),
    Indicator.RUBLE: Decimal("91.45"),
    Indicator.POUND: Decimal("0.79"),
    Indicator.EURO: Decimal("0.92"),
    Indicator.TEN_YEAR_YIELD: Decimal("4.19"),
    Indicator.SILVER: Decimal("23.14"),
    Indicator.GOLD: Decimal("2095.70"),
}

_STUB_TICKER_PRICES: dict[str, Decimal] = {
    "AAPL": Decimal("185.50"),
    "GOOGL": Decimal("142.75"),
    "MSFT": Decimal("378.25"),
    "AMZN": Decimal("178.50"),
    "TSLA": Decimal("248.75"),
    "NVDA": Decimal("485.25"),
    "META": Decimal("505.50"),
}


class StubCredentialBroker:
    """Returns a fixed credential without touching the network."""

    def obtain(self) -> Credential:
        return Credential(cookie="A3=stub", token="stub-crumb")


class StubQuoteFetcher:
    """
    Stub fetcher with deterministic fake data for offline operation.

    Prices drift by a small seeded random change on every fetch.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)

    def fetch(self, credential: Credential, tickers: Sequence[str] = ()) -> FetchResult:
        """Return a stub snapshot for all indicators and requested tickers."""
        indicators = tuple(
            self._indicator_record(indicator, _STUB_INDICATOR_PRICES[indicator])
            for indicator in Indicator
        )

        quotes: dict[str, TickerQuote] = {}
        for symbol in tickers:
            upper_symbol = symbol.upper()
            base_price = _STUB_TICKER_PRICES.get(upper_symbol)
            if base_price is None:
                base_price = Decimal(str(50 + self._rng.random() * 200))
            latest, change, percent = self._drift(base_price)
            quotes[upper_symbol] = TickerQuote(
                symbol=upper_symbol,
                latest=latest,
                change=change,
                percent=percent,
            )

        return FetchResult(
            snapshot=MarketSnapshot(
                indicators=indicators,
                tickers=quotes,
                as_of=now_eastern(),
                is_closed=not self.is_market_open(),
            )
        )

    def is_market_open(self) -> bool:
        """Stub: always returns True."""
        return True

    def _indicator_record(self, indicator: Indicator, base_price: Decimal) -> IndicatorRecord:
        latest, change, percent = self._drift(base_price)
        return IndicatorRecord(
            indicator=indicator,
            latest=latest,
            change=change,
            percent=percent,
            label=YIELD_LABEL if indicator is Indicator.TEN_YEAR_YIELD else None,
        )

    def _drift(self, base_price: Decimal) -> tuple[str, str, str]:
        change_pct = Decimal(str((self._rng.random() - 0.5) * 4))
        change = base_price * change_pct / 100
        return (
            format_number(base_price + change),
            format_number(change),
            format_percent(change_pct),
        )
