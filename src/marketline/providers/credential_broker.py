"""Yahoo Finance session credential (cookie + crumb) acquisition."""

import logging
from typing import Optional

import requests

from marketline.config.settings import Settings, get_settings
from marketline.core.exceptions import CredentialError
from marketline.domain.models import Credential

logger = logging.getLogger(__name__)


class YahooCredentialBroker:
    """
    Obtains the cookie and anti-forgery crumb the quote endpoint requires.

    Called once at startup. There is no retry or refresh: if the session
    later expires, fetches fail and surface as NetworkError.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self._settings = settings or get_settings()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self._settings.user_agent})

    def obtain(self) -> Credential:
        """Fetch a cookie, then the crumb bound to it."""
        cookie = self._fetch_cookie()
        token = self._fetch_crumb(cookie)
        logger.info("Obtained provider credential")
        return Credential(cookie=cookie, token=token)

    def _fetch_cookie(self) -> str:
        timeout = self._settings.request_timeout_seconds
        try:
            # The cookie endpoint answers 404 but still sets the session cookie.
            response = self._session.get(
                self._settings.cookie_url,
                timeout=timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise CredentialError(f"Cookie request failed: {e}") from e

        self._session.cookies.update(response.cookies)
        cookie = "; ".join(f"{c.name}={c.value}" for c in self._session.cookies)
        if not cookie:
            raise CredentialError(
                f"No session cookie returned by {self._settings.cookie_url} "
                f"(status {response.status_code})"
            )
        return cookie

    def _fetch_crumb(self, cookie: str) -> str:
        try:
            response = self._session.get(
                self._settings.crumb_url,
                headers={"Cookie": cookie, "Accept": "*/*"},
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise CredentialError(f"Crumb request failed: {e}") from e

        token = response.text.strip()
        if not token or "<" in token:
            raise CredentialError("Provider returned an empty or invalid crumb")
        return token
