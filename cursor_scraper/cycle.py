from __future__ import annotations

import time
from typing import Optional

from .coordination import CoordinationClient
from .errors import ScraperError
from .models import CycleOutcome, ScraperConfig
from .photo_api import PhotoApiClient
from .proxies import select_proxy


class CycleController:
    """Runs one read-cursor -> fetch -> submit -> increment cycle.

    - A cursor-read failure ends the cycle before any fetch.
    - A fetch failure ends the cycle before any writeback.
    - Submit and increment are both attempted; the first failure is reported.
    Only ScraperError is converted into a failed outcome; anything else is a bug
    and propagates.
    """

    def __init__(
        self,
        config: ScraperConfig,
        coordination: CoordinationClient,
        photo_api: PhotoApiClient,
    ) -> None:
        self._config = config
        self._coordination = coordination
        self._photo_api = photo_api

    def run_cycle(self, cycle_index: int) -> CycleOutcome:
        start_ms = self._now_ms()

        try:
            page = self._coordination.read_cursor()
        except ScraperError as exc:
            return self._failed(cycle_index, start_ms, "read_cursor", exc)

        proxy = select_proxy(self._config.proxies, cycle_index)

        try:
            body = self._photo_api.fetch_page(page, self._config.per_page, proxy)
        except ScraperError as exc:
            return self._failed(cycle_index, start_ms, "fetch", exc, page=page, proxy=proxy)

        first_error: Optional[ScraperError] = None
        failed_stage: Optional[str] = None
        try:
            self._coordination.submit_scrape(body)
        except ScraperError as exc:
            first_error, failed_stage = exc, "submit"
        try:
            self._coordination.increment_cursor()
        except ScraperError as exc:
            if first_error is None:
                first_error, failed_stage = exc, "increment"

        if first_error is not None:
            return self._failed(cycle_index, start_ms, failed_stage, first_error, page=page, proxy=proxy)

        return CycleOutcome(
            cycle_index=cycle_index,
            success=True,
            page=page,
            proxy=proxy,
            latency_ms=self._now_ms() - start_ms,
        )

    def _failed(
        self,
        cycle_index: int,
        start_ms: int,
        stage: Optional[str],
        error: ScraperError,
        page: Optional[int] = None,
        proxy: Optional[str] = None,
    ) -> CycleOutcome:
        return CycleOutcome(
            cycle_index=cycle_index,
            success=False,
            page=page,
            proxy=proxy,
            stage=stage,
            error=error,
            latency_ms=self._now_ms() - start_ms,
        )

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
