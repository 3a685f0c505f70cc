"""Quote providers module."""

from marketline.providers.quote_provider import CredentialBroker, QuoteFetcher
from marketline.providers.credential_broker import YahooCredentialBroker
from marketline.providers.yahoo_provider import YahooQuoteFetcher
from marketline.providers.stub_provider import StubCredentialBroker, StubQuoteFetcher

__all__ = [
    "CredentialBroker",
    "QuoteFetcher",
    "YahooCredentialBroker",
    "YahooQuoteFetcher",
    "StubCredentialBroker",
    "StubQuoteFetcher",
]
