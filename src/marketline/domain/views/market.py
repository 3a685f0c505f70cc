"""View models for decoded market data."""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional

from marketline.core.exceptions import QuoteFetchError
from marketline.domain.models.enums import Indicator

YIELD_LABEL = "10-year Yield"


@dataclass(frozen=True)
class IndicatorRecord:
    """Display-ready values for one market indicator."""

    indicator: Indicator
    latest: str = ""
    change: str = ""
    percent: str = ""
    label: Optional[str] = None

    @property
    def name(self) -> str:
        return self.label or self.indicator.display_name


@dataclass(frozen=True)
class TickerQuote:
    """Display-ready values for one user ticker."""

    symbol: str
    latest: str
    change: str
    percent: str


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Result of one successful fetch.

    Immutable: the fetch worker builds a new snapshot and the owner
    publishes it whole, so readers never see a half-decoded state.
    """

    indicators: tuple[IndicatorRecord, ...]
    tickers: Mapping[str, TickerQuote] = field(
        default_factory=lambda: MappingProxyType({})
    )
    as_of: Optional[datetime] = None
    # No open/closed signal source yet; always reported open.
    is_closed: bool = False

    def __post_init__(self) -> None:
        if len(self.indicators) != len(Indicator):
            raise ValueError(
                f"Expected {len(Indicator)} indicator records, got {len(self.indicators)}"
            )
        if not isinstance(self.tickers, MappingProxyType):
            object.__setattr__(self, "tickers", MappingProxyType(dict(self.tickers)))

    @classmethod
    def empty(cls) -> "MarketSnapshot":
        """Blank snapshot shown until the first fetch succeeds."""
        return cls(indicators=tuple(IndicatorRecord(indicator=i) for i in Indicator))

    def __getitem__(self, indicator: Indicator) -> IndicatorRecord:
        return self.indicators[indicator.position]

    def quote(self, symbol: str) -> Optional[TickerQuote]:
        """Return the quote for a ticker, if the provider returned one."""
        return self.tickers.get(symbol.upper())


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: exactly one of snapshot or error is set."""

    snapshot: Optional[MarketSnapshot] = None
    error: Optional[QuoteFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.snapshot is not None
