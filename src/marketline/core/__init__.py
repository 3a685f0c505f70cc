"""Core utilities and shared functionality."""

from marketline.core.timezone import (
    now_eastern,
    EASTERN_TZ,
)
from marketline.core.exceptions import (
    AppError,
    CredentialError,
    QuoteFetchError,
    NetworkError,
    DecodeError,
)

__all__ = [
    "now_eastern",
    "EASTERN_TZ",
    "AppError",
    "CredentialError",
    "QuoteFetchError",
    "NetworkError",
    "DecodeError",
]
