from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from curl_cffi import requests as curl_requests
from curl_cffi.requests import exceptions as curl_exceptions

from .errors import ConfigurationError, HttpStatusError, TransportError
from .models import ScraperConfig


# Checked before the transport errors: SSLError and ProxyError subclass ConnectionError.
# curl raises ProxyError when the proxy host cannot be resolved or refuses the
# CONNECT, SSLError on certificate failures, ImpersonateError for an unknown
# browser profile. A proxy that is merely down surfaces as ConnectionError.
_CONFIG_ERRORS = (
    curl_exceptions.SSLError,
    curl_exceptions.ProxyError,
    curl_exceptions.ImpersonateError,
)


class PhotoApiClient:
    """Fetches listing pages from the remote photo API.

    Sessions are cached per proxy endpoint (None for direct traffic), so each
    route keeps its connections alive across cycles.
    """

    def __init__(
        self,
        config: ScraperConfig,
        session_factory: Callable[[], Any] = curl_requests.Session,
    ) -> None:
        self._url = config.url
        self._timeout = config.timeout_secs
        self._verify = not config.insecure_tls
        self._impersonate = config.impersonate
        self._headers = {
            "User-Agent": config.user_agent,
            "Authorization": config.auth_header,
        }
        self._session_factory = session_factory
        self._sessions: Dict[Optional[str], Any] = {}

    def fetch_page(self, page: int, per_page: int, proxy: Optional[str] = None) -> str:
        """GET one page and return the raw body text on a 2xx response."""
        session = self._session_for(proxy)
        kwargs: Dict[str, Any] = {
            "params": {"page": page, "per_page": per_page},
            "headers": self._headers,
            "timeout": self._timeout,
            "verify": self._verify,
        }
        if proxy is not None:
            kwargs["proxies"] = {"http": proxy, "https": proxy}
        if self._impersonate:
            kwargs["impersonate"] = self._impersonate

        try:
            response = session.get(self._url, **kwargs)
        except _CONFIG_ERRORS as exc:
            raise ConfigurationError(f"Request setup failed via proxy={proxy}: {type(exc).__name__}") from exc
        except curl_exceptions.RequestException as exc:
            raise TransportError(f"GET {self._url} failed: {type(exc).__name__}") from exc

        status_code = int(response.status_code)
        if not 200 <= status_code < 300:
            raise HttpStatusError(status_code, self._url)
        return response.text

    def close(self) -> None:
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()

    def __enter__(self) -> "PhotoApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _session_for(self, proxy: Optional[str]) -> Any:
        session = self._sessions.get(proxy)
        if session is None:
            session = self._session_factory()
            self._sessions[proxy] = session
        return session
