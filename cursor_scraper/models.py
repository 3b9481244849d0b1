from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import urlsplit as _urlsplit

from .errors import ConfigurationError, ScraperError
from .proxies import validate_proxy


DEFAULT_URL = "https://api.unsplash.com/photos/"
DEFAULT_HOSTS = "http://localhost:8000"
DEFAULT_USER_AGENT = "cursor-scraper/0.1"
DEFAULT_BACKOFF_STEP_MS = 10_000
DEFAULT_TIMEOUT_SECS = 15.0


@dataclass(frozen=True)
class ScraperConfig:
    """Immutable parameters for one run.

    ``page`` is accepted for CLI compatibility but never consulted: the page
    to fetch always comes from the coordination service's cursor.
    """

    access_key: str
    url: str = DEFAULT_URL
    hosts: str = DEFAULT_HOSTS
    per_page: int = 30
    scrape_count: int = 100
    interval_ms: int = 240_000
    proxies: Tuple[str, ...] = ()
    page: int = 1
    insecure_tls: bool = False
    require_writeback_ok: bool = False
    backoff_step_ms: int = DEFAULT_BACKOFF_STEP_MS
    max_interval_ms: Optional[int] = None
    timeout_secs: float = DEFAULT_TIMEOUT_SECS
    user_agent: str = DEFAULT_USER_AGENT
    impersonate: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.access_key:
            raise ConfigurationError("access_key is required")
        _check_base_url("url", self.url)
        _check_base_url("hosts", self.hosts)
        if self.per_page <= 0:
            raise ConfigurationError("per_page must be positive")
        if self.scrape_count < 0:
            raise ConfigurationError("scrape_count must be non-negative")
        if self.interval_ms < 0:
            raise ConfigurationError("interval_ms must be non-negative")
        if self.backoff_step_ms < 0:
            raise ConfigurationError("backoff_step_ms must be non-negative")
        if self.max_interval_ms is not None and self.max_interval_ms < self.interval_ms:
            raise ConfigurationError("max_interval_ms must not be below interval_ms")
        if self.timeout_secs <= 0:
            raise ConfigurationError("timeout_secs must be positive")
        # Normalise list input so the dataclass stays hashable.
        object.__setattr__(self, "proxies", tuple(validate_proxy(p) for p in self.proxies))
        object.__setattr__(self, "hosts", self.hosts.rstrip("/"))

    @property
    def auth_header(self) -> str:
        return f"Client-ID {self.access_key}"


@dataclass(frozen=True)
class CycleOutcome:
    cycle_index: int
    success: bool
    page: Optional[int] = None
    proxy: Optional[str] = None
    stage: Optional[str] = None
    error: Optional[ScraperError] = None
    latency_ms: int = 0

    @property
    def error_type(self) -> Optional[str]:
        if self.error is None:
            return None
        return type(self.error).__name__


@dataclass(frozen=True)
class RunSummary:
    cycles: int
    success_count: int
    failure_count: int
    final_interval_ms: int
    outcomes: Tuple[CycleOutcome, ...] = field(default_factory=tuple)


def _check_base_url(name: str, value: str) -> None:
    """Require an absolute http(s) URL."""
    if not value:
        raise ConfigurationError(f"{name} is required")
    try:
        parts = _urlsplit(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} is not a valid URL: {value!r}") from exc
    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"{name} must be an http(s) URL with a host: {value!r}")
