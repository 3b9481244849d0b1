from __future__ import annotations

import sys
import time
from typing import Callable, List, Optional

from .cycle import CycleController
from .models import CycleOutcome, RunSummary, ScraperConfig
from .pacing import PacingPolicy


def run(
    config: ScraperConfig,
    controller: CycleController,
    policy: Optional[PacingPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSummary:
    """Drive config.scrape_count cycles, sleeping the adaptive interval between them.

    The policy defaults to one built from the same config.

    Cycle failures are reported on stderr and only slow the loop down; they
    never stop it.
    """
    if policy is None:
        policy = PacingPolicy.from_config(config)
    scrape_count = config.scrape_count
    interval_ms = policy.base_ms
    outcomes: List[CycleOutcome] = []

    for cycle_index in range(scrape_count):
        outcome = controller.run_cycle(cycle_index)
        outcomes.append(outcome)
        _report(outcome)

        interval_ms = policy.next_interval(interval_ms, outcome)
        if cycle_index == scrape_count - 1:
            break
        print(f"next scrape in {interval_ms}ms")
        sleep(interval_ms / 1000)

    ok = sum(1 for o in outcomes if o.success)
    return RunSummary(
        cycles=len(outcomes),
        success_count=ok,
        failure_count=len(outcomes) - ok,
        final_interval_ms=interval_ms,
        outcomes=tuple(outcomes),
    )


def _report(outcome: CycleOutcome) -> None:
    line = (
        f"cycle={outcome.cycle_index} page={outcome.page} proxy={outcome.proxy} "
        f"success={outcome.success} latency_ms={outcome.latency_ms}"
    )
    if outcome.success:
        print(line)
        return
    print(
        f"{line} stage={outcome.stage} error={outcome.error_type} detail={outcome.error}",
        file=sys.stderr,
    )
