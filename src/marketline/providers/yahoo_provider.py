"""Yahoo Finance batch quote fetcher."""

import logging
import time
from typing import Callable, Optional, Sequence
from urllib.parse import urlencode, urlsplit

import requests

from marketline.config.settings import Settings, get_settings
from marketline.core.exceptions import DecodeError, NetworkError, QuoteFetchError
from marketline.core.timezone import now_eastern
from marketline.domain.models import Credential, Indicator
from marketline.domain.views import FetchResult, MarketSnapshot
from marketline.providers.decoding import decode_indicators, decode_tickers

logger = logging.getLogger(__name__)

# Fixed query parameters the endpoint expects alongside crumb and symbols.
QUERY_PARTS: dict[str, str] = {
    "range": "1d",
    "interval": "5m",
    "indicators": "close",
    "includeTimestamps": "false",
    "includePrePost": "false",
    "corsDomain": "finance.yahoo.com",
    ".tsrc": "finance",
}


class YahooQuoteFetcher:
    """
    Fetches indicator and ticker quotes from the Yahoo quote endpoint.

    fetch() is the failure boundary: network errors, bad statuses, malformed
    bodies and anything unexpected are logged and returned as
    FetchResult.error. No partial snapshot is ever produced.

    request_timeout_seconds limits the whole fetch: the ticker request
    only gets the time the indicator request left over.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings or get_settings()
        self._session = session or requests.Session()
        self._clock = clock

    def build_url(self, credential: Credential, symbols: Sequence[str]) -> str:
        """Build the batch quote URL for the given symbols."""
        params = {"crumb": credential.token, "symbols": ",".join(symbols)}
        params.update(QUERY_PARTS)
        return f"{self._settings.quote_url}?{urlencode(params, safe=',^=')}"

    def build_headers(self, credential: Credential) -> dict[str, str]:
        """Browser-like headers; the provider rejects calls without them."""
        host = urlsplit(self._settings.quote_url).netloc
        return {
            "Accept": "*/*",
            "Accept-Language": "en-US,en;q=0.5",
            "Connection": "keep-alive",
            "Content-Type": "application/json",
            "Cookie": credential.cookie,
            "Host": host,
            "Origin": "https://finance.yahoo.com",
            "Referer": "https://finance.yahoo.com",
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-site",
            "TE": "trailers",
            "User-Agent": self._settings.user_agent,
        }

    def fetch(self, credential: Credential, tickers: Sequence[str] = ()) -> FetchResult:
        """Fetch all indicators and the given tickers as one snapshot."""
        deadline = self._clock() + self._settings.request_timeout_seconds
        try:
            indicators = decode_indicators(self._get(credential, Indicator.symbols(), deadline))
            quotes = decode_tickers(self._get(credential, tickers, deadline)) if tickers else {}
            snapshot = MarketSnapshot(
                indicators=indicators,
                tickers=quotes,
                as_of=now_eastern(),
                is_closed=not self.is_market_open(),
            )
        except QuoteFetchError as e:
            logger.warning("Quote fetch failed [%s]: %s", e.code, e.message)
            return FetchResult(error=e)
        except Exception as e:
            logger.exception("Unexpected error during quote fetch")
            return FetchResult(error=QuoteFetchError(f"Unexpected error: {e}"))

        return FetchResult(snapshot=snapshot)

    def is_market_open(self) -> bool:
        """Always True until a market-hours signal source exists."""
        # TODO: derive from the provider's marketState field once tickers carry it
        return True

    def _timed_out(self) -> NetworkError:
        return NetworkError(
            f"Quote fetch timed out after {self._settings.request_timeout_seconds}s"
        )

    def _get(self, credential: Credential, symbols: Sequence[str], deadline: float) -> bytes:
        remaining = deadline - self._clock()
        if remaining <= 0:
            raise self._timed_out()

        url = self.build_url(credential, symbols)
        try:
            response = self._session.get(
                url,
                headers=self.build_headers(credential),
                timeout=remaining,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise self._timed_out() from e
        except requests.RequestException as e:
            raise NetworkError(f"Quote request failed: {e}") from e

        body = response.content
        if not body:
            raise DecodeError("Empty quote response body")
        if self._clock() > deadline:
            # Each socket read is bounded, a slowly trickling body is not
            raise self._timed_out()
        return body
