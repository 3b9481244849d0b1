from __future__ import annotations

from typing import Optional

from .models import CycleOutcome, ScraperConfig


class PacingPolicy:
    """Linear backoff for the delay between scrape cycles.

    A successful cycle resets the delay to the base interval; each failure adds
    a fixed step. Growth is unbounded unless max_ms is given."""

    def __init__(self, base_ms: int, step_ms: int = 10_000, max_ms: Optional[int] = None) -> None:
        self._base = base_ms
        self._step = step_ms
        self._max = max_ms

    @classmethod
    def from_config(cls, config: ScraperConfig) -> "PacingPolicy":
        return cls(config.interval_ms, config.backoff_step_ms, config.max_interval_ms)

    @property
    def base_ms(self) -> int:
        return self._base

    def next_interval(self, current_ms: int, outcome: CycleOutcome) -> int:
        """Return the delay in milliseconds to wait before the next cycle."""
        if outcome.success:
            return self._base
        grown = current_ms + self._step
        if self._max is not None:
            grown = min(self._max, grown)
        return grown
