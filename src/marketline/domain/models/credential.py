"""Provider credential domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """
    Session cookie and matching anti-forgery token (crumb).

    Obtained once per dashboard session; never refreshed.
    """

    cookie: str
    token: str

    def __repr__(self) -> str:
        return "Credential(cookie=<redacted>, token=<redacted>)"
