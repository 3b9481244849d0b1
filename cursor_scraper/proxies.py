from __future__ import annotations

from typing import Optional, Sequence, Tuple
from urllib.parse import urlsplit as _urlsplit

from .errors import ConfigurationError


SUPPORTED_SCHEMES = ("http", "https", "socks4", "socks5", "socks5h")


def validate_proxy(url: str) -> str:
    """Return the proxy URL stripped of whitespace, or raise ConfigurationError."""
    candidate = url.strip()
    try:
        parts = _urlsplit(candidate)
        port = parts.port  # raises ValueError on a non-numeric port
    except ValueError as exc:
        raise ConfigurationError(f"Invalid proxy URL: {url!r}") from exc
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise ConfigurationError(f"Unsupported proxy scheme in {url!r}")
    if not parts.hostname:
        raise ConfigurationError(f"Proxy URL has no host: {url!r}")
    if port is not None and not 0 < port < 65536:
        raise ConfigurationError(f"Proxy port out of range: {url!r}")
    return candidate


def parse_proxy_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-delimited proxy list, dropping empty entries."""
    if not raw:
        return ()
    proxies = []
    for part in raw.split(","):
        if not part.strip():
            continue
        proxies.append(validate_proxy(part))
    return tuple(proxies)


def select_proxy(proxies: Sequence[str], cycle_index: int) -> Optional[str]:
    """Round-robin proxy for a cycle; None when no proxies are configured."""
    if not proxies:
        return None
    return proxies[cycle_index % len(proxies)]
