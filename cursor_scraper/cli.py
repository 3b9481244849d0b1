from __future__ import annotations

import argparse
from typing import List, Optional

from .coordination import CoordinationClient
from .cycle import CycleController
from .errors import ConfigurationError
from .models import (
    DEFAULT_BACKOFF_STEP_MS,
    DEFAULT_HOSTS,
    DEFAULT_TIMEOUT_SECS,
    DEFAULT_URL,
    ScraperConfig,
)
from .photo_api import PhotoApiClient
from .proxies import parse_proxy_list
from .runner import run


DEFAULT_INTERVAL_MS = 240_000
DEFAULT_PROXIED_INTERVAL_MS = 3_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch photo API pages at the cursor held by a coordination service and forward them.",
    )
    parser.add_argument("--url", "-u", default=DEFAULT_URL, help="Photo API listing endpoint")
    parser.add_argument("--page", "-p", type=int, default=1, help="Accepted for compatibility; the cursor decides the page")
    parser.add_argument("--scrape_count", type=int, default=100, help="Number of scrape cycles to run")
    parser.add_argument("--per_page", "-P", type=int, default=30, help="Results per page")
    parser.add_argument(
        "--interval", "-i", type=int, default=None,
        help=f"Base interval between cycles in ms (default {DEFAULT_INTERVAL_MS}, "
             f"or {DEFAULT_PROXIED_INTERVAL_MS} when proxies are given)",
    )
    parser.add_argument("--access_key", "-k", required=True, help="Photo API access key")
    parser.add_argument("--hosts", "-H", default=DEFAULT_HOSTS, help="Coordination service base URL")
    parser.add_argument("--proxy", "-x", default=None, help="Comma-delimited proxy URLs, rotated per cycle")

    parser.add_argument("--insecure-tls", action="store_true", help="Disable TLS certificate checks for the photo API")
    parser.add_argument(
        "--require-writeback-ok", action="store_true",
        help="Fail the cycle when submit/increment answer with a non-2xx status",
    )
    parser.add_argument("--backoff-step", type=int, default=DEFAULT_BACKOFF_STEP_MS, help="Interval growth per failed cycle (ms)")
    parser.add_argument("--max-interval", type=int, default=None, help="Upper bound for the interval (ms); unbounded if unset")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECS, help="Per-request timeout in seconds")
    parser.add_argument("--impersonate", default=None, help="curl_cffi browser profile for the photo API, e.g. chrome120")
    return parser


def config_from_args(args: argparse.Namespace) -> ScraperConfig:
    proxies = parse_proxy_list(args.proxy)
    interval = args.interval
    if interval is None:
        interval = DEFAULT_PROXIED_INTERVAL_MS if proxies else DEFAULT_INTERVAL_MS
    return ScraperConfig(
        access_key=args.access_key,
        url=args.url,
        hosts=args.hosts,
        per_page=args.per_page,
        scrape_count=args.scrape_count,
        interval_ms=interval,
        proxies=proxies,
        page=args.page,
        insecure_tls=args.insecure_tls,
        require_writeback_ok=args.require_writeback_ok,
        backoff_step_ms=args.backoff_step,
        max_interval_ms=args.max_interval,
        timeout_secs=args.timeout,
        impersonate=args.impersonate,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    coordination = CoordinationClient(config)
    photo_api = PhotoApiClient(config)
    try:
        controller = CycleController(config, coordination, photo_api)
        summary = run(config, controller)
    finally:
        photo_api.close()
        coordination.close()

    print(f"\nDONE: success={summary.success_count} fail={summary.failure_count} total={summary.cycles}")
    # Failed cycles are reported above, never through the exit status.
    return 0
