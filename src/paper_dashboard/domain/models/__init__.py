"""Domain models package."""

from paper_dashboard.domain.models.enums import OrderSide, CacheClass
from paper_dashboard.domain.models.account import AccountBalance, BrokeragePosition
from paper_dashboard.domain.models.fill import Fill, ValuationCheckpoint, PriceBar
from paper_dashboard.domain.models.cache import CacheEntry
from paper_dashboard.domain.models.sync import SyncedPosition, TradingLog, PerformanceMetric
from paper_dashboard.domain.models.reasoning import ReasoningEntry

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
