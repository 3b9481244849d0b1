from __future__ import annotations

from typing import Any, Optional

import requests

from .errors import ConfigurationError, HttpStatusError, ProtocolError, TransportError
from .models import ScraperConfig


CURSOR_PATH = "/api/unsplash_page"
INCREMENT_PATH = "/api/unsplash_page/increment"
SCRAPE_PATH = "/api/unsplash_page/scrape"

_CONFIG_ERRORS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
)


class CoordinationClient:
    """Talks to the coordination service that owns the page cursor.

    One requests.Session is kept for the lifetime of the client. Writeback
    calls (submit, increment) ignore the response status unless the config
    sets require_writeback_ok.
    """

    def __init__(self, config: ScraperConfig, session: Optional[requests.Session] = None) -> None:
        self._hosts = config.hosts
        self._timeout = config.timeout_secs
        self._require_ok = config.require_writeback_ok
        self._auth_headers = {
            "User-Agent": config.user_agent,
            "Authorization": config.auth_header,
        }
        self._session = session if session is not None else requests.Session()

    def read_cursor(self) -> int:
        """Return the page the coordination service wants fetched next."""
        url = self._hosts + CURSOR_PATH
        response = self._send("GET", url)
        try:
            body = response.json()
        except ValueError as exc:
            raise ProtocolError(f"Cursor response from {url} is not JSON") from exc

        counter = body.get("counter") if isinstance(body, dict) else None
        # bool is an int subclass; reject it explicitly
        if isinstance(counter, bool) or not isinstance(counter, int):
            raise ProtocolError(f"Cursor response from {url} has no integer 'counter'")
        if counter < 0:
            raise ProtocolError(f"Cursor response from {url} is negative: {counter}")
        return counter

    def increment_cursor(self) -> None:
        url = self._hosts + INCREMENT_PATH
        response = self._send("POST", url, headers={"Content-Type": "application/json"})
        self._check_writeback(response, url)

    def submit_scrape(self, payload: str) -> None:
        """Forward one raw page body as {"payload": ...}."""
        url = self._hosts + SCRAPE_PATH
        response = self._send("POST", url, headers=self._auth_headers, json={"payload": payload})
        self._check_writeback(response, url)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "CoordinationClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except _CONFIG_ERRORS as exc:
            raise ConfigurationError(f"{method} {url} is not a usable URL: {type(exc).__name__}") from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {type(exc).__name__}") from exc

    def _check_writeback(self, response: requests.Response, url: str) -> None:
        if not self._require_ok:
            return
        status_code = int(response.status_code)
        if not 200 <= status_code < 300:
            raise HttpStatusError(status_code, url)
