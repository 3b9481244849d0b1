from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for failures surfaced by a scrape cycle."""


class TransportError(ScraperError):
    """Network, connection or timeout failure talking to a remote endpoint."""


class ProtocolError(ScraperError):
    """A remote endpoint answered with a body we could not interpret."""


class ConfigurationError(ScraperError):
    """Invalid settings, proxy URL or TLS setup."""


class HttpStatusError(ScraperError):
    """Non-2xx response from a remote endpoint."""

    def __init__(self, code: int, url: Optional[str] = None) -> None:
        self.code = code
        self.url = url
        msg = f"HTTP {code}" if url is None else f"HTTP {code} from {url}"
        super().__init__(msg)
