"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class CredentialError(AppError):
    """Raised when the provider session cookie or crumb cannot be obtained.

    Fatal: without a credential no quote can ever be fetched.
    """

    def __init__(self, message: str):
        super().__init__(message, code="CREDENTIAL_ERROR")


class QuoteFetchError(AppError):
    """Base for recoverable quote fetch failures."""

    def __init__(self, message: str, code: str = "FETCH_ERROR"):
        super().__init__(message, code=code)


class NetworkError(QuoteFetchError):
    """Raised on timeout, connection failure or non-2xx response."""

    def __init__(self, message: str):
        super().__init__(message, code="NETWORK_ERROR")


class DecodeError(QuoteFetchError):
    """Raised when the response body does not have the expected shape."""

    def __init__(self, message: str):
        super().__init__(message, code="DECODE_ERROR")
