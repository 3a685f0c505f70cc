"""Service layer - business logic orchestration."""

from marketline.services.ticker_set import TickerSet, normalize_symbol
from marketline.services.market_data_service import MarketDataService
from marketline.services.quote_refresher import QuoteRefresher

__all__ = [
    "TickerSet",
    "normalize_symbol",
    "MarketDataService",
    "QuoteRefresher",
]
