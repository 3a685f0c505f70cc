"""Market data service: owner of the published snapshot."""

import logging
import threading
from typing import Optional

from marketline.core.exceptions import QuoteFetchError
from marketline.domain.views import FetchResult, MarketSnapshot

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Holds the latest successfully fetched snapshot and the fetch health.

    A failed fetch keeps the previous (stale) snapshot. By default the
    error message is not surfaced to the screen, only the unhealthy flag;
    the error itself stays available through last_error and the log.
    """

    def __init__(self, show_errors: bool = False):
        self._show_errors = show_errors
        self._lock = threading.Lock()
        self._snapshot = MarketSnapshot.empty()
        self._last_error: Optional[QuoteFetchError] = None

    @property
    def snapshot(self) -> MarketSnapshot:
        """The currently published snapshot."""
        with self._lock:
            return self._snapshot

    @property
    def last_error(self) -> Optional[QuoteFetchError]:
        """Error of the last fetch, or None if it succeeded."""
        with self._lock:
            return self._last_error

    def apply(self, result: FetchResult) -> bool:
        """
        Publish a fetch result.

        Returns True when a new snapshot was published.
        """
        with self._lock:
            if result.ok:
                self._snapshot = result.snapshot
                self._last_error = None
                return True

            self._last_error = result.error or QuoteFetchError("Fetch returned no snapshot")

        logger.debug("Keeping stale snapshot after failed fetch: %s", self._last_error)
        return False

    def ok(self) -> tuple[bool, str]:
        """
        Report health of the last fetch.

        Returns (healthy, message); the message is empty unless error
        display was enabled in settings.
        """
        with self._lock:
            if self._last_error is None:
                return True, ""
            return False, self._last_error.message if self._show_errors else ""
