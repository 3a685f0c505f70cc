"""Background quote refresh worker."""

import concurrent.futures
import logging
import time
from typing import Callable, Optional

from marketline.core.exceptions import NetworkError
from marketline.domain.models import Credential
from marketline.domain.views import FetchResult
from marketline.providers.quote_provider import QuoteFetcher
from marketline.services.market_data_service import MarketDataService
from marketline.services.ticker_set import TickerSet

logger = logging.getLogger(__name__)


def _new_executor() -> concurrent.futures.Executor:
    return concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="quote-fetch")


class QuoteRefresher:
    """
    Runs fetches off the input thread and hands results back to it.

    The owning loop calls tick() to start a fetch when one is due and
    poll() to publish a finished one. At most one fetch is in flight, and
    results are applied only from poll(), so MarketDataService has a
    single writer.

    A fetch still running after fetch_timeout_seconds is abandoned and
    published as a NetworkError; its late result is discarded.
    """

    def __init__(
        self,
        fetcher: QuoteFetcher,
        credential: Credential,
        ticker_set: TickerSet,
        market_data: MarketDataService,
        interval_seconds: float = 10.0,
        fetch_timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._fetcher = fetcher
        self._credential = credential
        self._ticker_set = ticker_set
        self._market_data = market_data
        self._interval = interval_seconds
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        self._owns_executor = executor is None
        self._executor = executor or _new_executor()
        self._pending: Optional[concurrent.futures.Future] = None
        self._started_at: float = 0.0
        self._next_due: float = 0.0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def fetch_timeout_seconds(self) -> Optional[float]:
        return self._fetch_timeout

    @property
    def in_flight(self) -> bool:
        return self._pending is not None

    def tick(self) -> bool:
        """Start a fetch if one is due and none is running."""
        if self._pending is not None or self._clock() < self._next_due:
            return False
        return self.refresh_now()

    def refresh_now(self) -> bool:
        """
        Start a fetch immediately.

        If one is already running, the next fetch becomes due as soon as
        it finishes, since it may have been sent with an older ticker list.
        """
        if self._pending is not None:
            self._next_due = self._clock()
            return False
        tickers = self._ticker_set.symbols()
        self._started_at = self._clock()
        self._pending = self._executor.submit(self._fetcher.fetch, self._credential, tickers)
        self._next_due = self._started_at + self._interval
        return True

    def poll(self) -> bool:
        """
        Publish a finished fetch, if any.

        Returns True when a new snapshot was published and the screen
        should be redrawn.
        """
        if self._pending is None:
            return False
        if not self._pending.done():
            if self._is_overdue():
                self._abandon()
            return False

        future, self._pending = self._pending, None
        try:
            result: FetchResult = future.result()
        except Exception:
            # fetch() contains its own failures; this is a fetcher bug.
            logger.exception("Quote fetcher raised instead of returning an error")
            return False
        return self._market_data.apply(result)

    def close(self) -> None:
        """Stop the worker without waiting for a blocked request."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _is_overdue(self) -> bool:
        if self._fetch_timeout is None:
            return False
        return self._clock() - self._started_at >= self._fetch_timeout

    def _abandon(self) -> None:
        future, self._pending = self._pending, None
        future.cancel()
        logger.warning("Abandoning quote fetch after %ss", self._fetch_timeout)
        if self._owns_executor:
            # The stuck worker would otherwise hold up the next fetch
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = _new_executor()
        self._market_data.apply(
            FetchResult(error=NetworkError(f"Quote fetch timed out after {self._fetch_timeout}s"))
        )
