"""Portfolio versus benchmark return comparison."""

from bisect import bisect_right
from datetime import timedelta
from typing import Sequence

from paper_dashboard.core.timezone import hours_between
from paper_dashboard.domain.models import PriceBar, ValuationCheckpoint
from paper_dashboard.domain.views import BenchmarkPoint
from paper_dashboard.services.position_history import hour_label

# Bars are requested from a day before the first checkpoint so that it has
# a preceding bar even when it falls before that day's session opens.
BENCHMARK_LOOKBACK = timedelta(days=1)


def compare_to_benchmark(
    checkpoints: Sequence[ValuationCheckpoint],
    bars: Sequence[PriceBar],
    max_gap_hours: float = 2.0,
) -> list[BenchmarkPoint]:
    """
    Percent returns of the portfolio and the benchmark since the first checkpoint.

    Each checkpoint is matched with the latest benchmark bar at or before it.
    Points whose matching bar is more than max_gap_hours old (nights,
    weekends) are dropped, and the remaining series is re-based so its first
    point reads 0% for both.
    """
    checkpoints = sorted(checkpoints, key=lambda c: c.timestamp)
    bars = sorted(bars, key=lambda b: b.timestamp)
    if not checkpoints or not bars:
        return []

    bar_times = [b.timestamp for b in bars]

    def bar_at(when):
        idx = bisect_right(bar_times, when)
        return bars[idx - 1] if idx else None

    first = checkpoints[0]
    initial_bar = bar_at(first.timestamp)
    if initial_bar is None or not initial_bar.close or not first.value:
        return []

    raw = []
    for checkpoint in checkpoints:
        bar = bar_at(checkpoint.timestamp) or bars[0]
        gap = abs(hours_between(bar.timestamp, checkpoint.timestamp))
        if gap > max_gap_hours:
            continue
        raw.append((
            checkpoint,
            (checkpoint.value - first.value) / first.value * 100,
            (bar.close - initial_bar.close) / initial_bar.close * 100,
        ))

    if not raw:
        return []

    _, base_portfolio, base_benchmark = raw[0]
    return [
        BenchmarkPoint(
            timestamp=checkpoint.timestamp,
            label=hour_label(checkpoint.timestamp),
            portfolio_return=portfolio_return - base_portfolio,
            benchmark_return=benchmark_return - base_benchmark,
        )
        for checkpoint, portfolio_return, benchmark_return in raw
    ]
