"""Application context for in-process service management.

Builds the provider and services from settings and hands them to the
terminal UI.
"""

from typing import Optional

from marketline.config.settings import Settings, get_settings
from marketline.domain.models import Credential
from marketline.providers import (
    CredentialBroker,
    QuoteFetcher,
    StubCredentialBroker,
    StubQuoteFetcher,
    YahooCredentialBroker,
    YahooQuoteFetcher,
)
from marketline.services import MarketDataService, QuoteRefresher, TickerSet


class AppContext:
    """
    Application context providing access to all services.

    Services are created lazily. The credential is obtained on first
    access and raises CredentialError if the provider refuses it.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize application context.

        Args:
            settings: Optional settings. If not provided, uses the global settings.
        """
        self._settings = settings

        # Service instances (lazy initialized)
        self._credential_broker: Optional[CredentialBroker] = None
        self._fetcher: Optional[QuoteFetcher] = None
        self._credential: Optional[Credential] = None
        self._ticker_set: Optional[TickerSet] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._refresher: Optional[QuoteRefresher] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def credential_broker(self) -> CredentialBroker:
        if self._credential_broker is None:
            if self.settings.offline:
                self._credential_broker = StubCredentialBroker()
            else:
                self._credential_broker = YahooCredentialBroker(settings=self.settings)
        return self._credential_broker

    @property
    def fetcher(self) -> QuoteFetcher:
        if self._fetcher is None:
            if self.settings.offline:
                self._fetcher = StubQuoteFetcher()
            else:
                self._fetcher = YahooQuoteFetcher(settings=self.settings)
        return self._fetcher

    @property
    def credential(self) -> Credential:
        """Obtain the provider credential once per session."""
        if self._credential is None:
            self._credential = self.credential_broker.obtain()
        return self._credential

    @property
    def ticker_set(self) -> TickerSet:
        """Get the TickerSet, seeded from settings."""
        if self._ticker_set is None:
            self._ticker_set = TickerSet(self.settings.tickers)
        return self._ticker_set

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            self._market_data_service = MarketDataService(
                show_errors=self.settings.show_fetch_errors,
            )
        return self._market_data_service

    @property
    def refresher(self) -> QuoteRefresher:
        """Get the QuoteRefresher instance."""
        if self._refresher is None:
            self._refresher = QuoteRefresher(
                fetcher=self.fetcher,
                credential=self.credential,
                ticker_set=self.ticker_set,
                market_data=self.market_data,
                interval_seconds=self.settings.refresh_interval_seconds,
                fetch_timeout_seconds=self.settings.request_timeout_seconds,
            )
        return self._refresher

    def close(self) -> None:
        """Clean up resources."""
        if self._refresher is not None:
            self._refresher.close()
            self._refresher = None


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set the global application context."""
    global _app_context
    _app_context = context
