"""Quote provider protocols."""

from typing import Protocol, Sequence

from marketline.domain.models import Credential
from marketline.domain.views import FetchResult


class CredentialBroker(Protocol):
    """Obtains the session credential required by the quote provider."""

    def obtain(self) -> Credential:
        """
        Fetch a fresh cookie and crumb.

        Raises CredentialError on any failure; callers treat it as fatal.
        """
        ...


class QuoteFetcher(Protocol):
    """
    Protocol for batch quote fetchers.

    Implementations never raise from fetch(): every failure is returned
    as FetchResult.error and the caller keeps its previous snapshot.
    """

    def fetch(self, credential: Credential, tickers: Sequence[str] = ()) -> FetchResult:
        """Fetch all indicators plus the given tickers as one snapshot."""
        ...

    def is_market_open(self) -> bool:
        """Check whether U.S. markets are open."""
        ...
