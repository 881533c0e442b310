"""View models for service outputs."""

from paper_dashboard.domain.views.portfolio import (
    OpenPosition,
    ClosedPosition,
    CLOSED,
    PositionState,
    PositionSnapshot,
    PricePoint,
    PriceSeries,
    HistoryPoint,
    PositionValuation,
    PositionHistoryPoint,
    BenchmarkPoint,
)
from paper_dashboard.domain.views.dashboard import (
    ActivityLogEntry,
    DashboardSummary,
    CacheStatusItem,
    SyncSummary,
)

__all__ = [
    "OpenPosition",
    "ClosedPosition",
    "CLOSED",
    "PositionState",
    "PositionSnapshot",
    "PricePoint",
    "PriceSeries",
    "HistoryPoint",
    "PositionValuation",
    "PositionHistoryPoint",
    "BenchmarkPoint",
    "ActivityLogEntry",
    "DashboardSummary",
    "CacheStatusItem",
    "SyncSummary",
]
