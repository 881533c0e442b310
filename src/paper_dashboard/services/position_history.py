"""Position history reconstruction by replaying fills against valuation checkpoints."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence

from paper_dashboard.core.timezone import floor_to_hour, is_top_of_hour, parse_timestamp
from paper_dashboard.domain.models import Fill, ValuationCheckpoint
from paper_dashboard.domain.views import (
    CLOSED,
    HistoryPoint,
    OpenPosition,
    PositionSnapshot,
    PositionState,
)

logger = logging.getLogger(__name__)

LABEL_FORMAT = "%m/%d %H:%M"

_ZERO = Decimal("0")


def reconstruct(
    fills: Iterable[Fill],
    checkpoints: Iterable[ValuationCheckpoint],
) -> list[PositionSnapshot]:
    """
    Net shares held per symbol at each checkpoint.

    Both inputs are sorted ascending by timestamp first. Fills are then
    consumed with a single cursor: every fill stamped at or before a
    checkpoint is applied to the running per-symbol totals before that
    checkpoint is emitted, so fills older than the first checkpoint count
    toward it. A symbol whose total lands on exactly zero is CLOSED until a
    later fill reopens it.
    """
    ordered_fills = sorted(fills, key=lambda f: f.timestamp)
    ordered_checkpoints = sorted(checkpoints, key=lambda c: c.timestamp)

    running: dict[str, Decimal] = {}
    cursor = 0
    snapshots: list[PositionSnapshot] = []

    for checkpoint in ordered_checkpoints:
        while cursor < len(ordered_fills) and ordered_fills[cursor].timestamp <= checkpoint.timestamp:
            fill = ordered_fills[cursor]
            running[fill.symbol] = running.get(fill.symbol, _ZERO) + fill.signed_quantity
            cursor += 1

        positions: dict[str, PositionState] = {}
        for symbol in sorted(running):
            shares = running[symbol]
            positions[symbol] = CLOSED if shares == _ZERO else OpenPosition(shares=shares)

        snapshots.append(
            PositionSnapshot(
                timestamp=checkpoint.timestamp,
                value=checkpoint.value,
                positions=positions,
            )
        )

    return snapshots


def build_checkpoints(
    equity: Sequence,
    timestamps: Sequence,
    min_value: float = 0.0,
) -> list[ValuationCheckpoint]:
    """
    Turn the brokerage's parallel equity/timestamp arrays into hourly checkpoints.

    Samples that cannot be parsed, or whose value is not above min_value
    (unfunded account), are dropped. Within one clock hour the sample exactly
    on the hour is kept; failing that, the first one seen.
    """
    if len(equity) != len(timestamps):
        logger.warning(
            "Portfolio history arrays differ in length (%d equity, %d timestamps); truncating",
            len(equity),
            len(timestamps),
        )

    by_hour: dict = {}
    for raw_value, raw_ts in zip(equity, timestamps):
        if raw_value is None:
            continue
        try:
            value = float(raw_value)
            timestamp = parse_timestamp(raw_ts)
        except (TypeError, ValueError):
            logger.warning("Skipping malformed history sample: value=%r timestamp=%r", raw_value, raw_ts)
            continue
        if value <= min_value:
            continue

        hour = floor_to_hour(timestamp)
        current = by_hour.get(hour)
        if current is None or (is_top_of_hour(timestamp) and not is_top_of_hour(current.timestamp)):
            by_hour[hour] = ValuationCheckpoint(timestamp=timestamp, value=value)

    return [by_hour[hour] for hour in sorted(by_hour)]


def hour_label(timestamp: datetime) -> str:
    return floor_to_hour(timestamp).strftime(LABEL_FORMAT)


def with_pnl(checkpoints: Sequence[ValuationCheckpoint]) -> list[HistoryPoint]:
    """Attach hour labels and the change from the previous checkpoint."""
    points = []
    previous = None
    for checkpoint in checkpoints:
        pnl = checkpoint.value - previous.value if previous is not None else 0.0
        points.append(
            HistoryPoint(
                timestamp=checkpoint.timestamp,
                label=hour_label(checkpoint.timestamp),
                value=checkpoint.value,
                pnl=pnl,
            )
        )
        previous = checkpoint
    return points
