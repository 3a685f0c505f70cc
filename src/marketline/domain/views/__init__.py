"""View models for service outputs."""

from marketline.domain.views.market import (
    YIELD_LABEL,
    IndicatorRecord,
    TickerQuote,
    MarketSnapshot,
    FetchResult,
)

__all__ = [
    "YIELD_LABEL",
    "IndicatorRecord",
    "TickerQuote",
    "MarketSnapshot",
    "FetchResult",
]
