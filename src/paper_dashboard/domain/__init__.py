"""Domain layer - pure models with no external dependencies."""

from paper_dashboard.domain.models import (
    OrderSide,
    CacheClass,
    AccountBalance,
    BrokeragePosition,
    Fill,
    ValuationCheckpoint,
    PriceBar,
    CacheEntry,
    SyncedPosition,
    TradingLog,
    PerformanceMetric,
    ReasoningEntry,
)

__all__ = [
    "OrderSide",
    "CacheClass",
    "AccountBalance",
    "BrokeragePosition",
    "Fill",
    "ValuationCheckpoint",
    "PriceBar",
    "CacheEntry",
    "SyncedPosition",
    "TradingLog",
    "PerformanceMetric",
    "ReasoningEntry",
]
