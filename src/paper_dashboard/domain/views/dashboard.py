"""View models for dashboard, cache status and sync outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class ActivityLogEntry:
    """An order rendered for the activity log."""

    order_id: Optional[str]
    title: str
    action: str
    symbol: str
    quantity: Decimal
    price: Optional[Decimal]
    total_value: Optional[Decimal]
    order_type: Optional[str]
    status: Optional[str]
    timestamp: datetime


@dataclass
class DashboardSummary:
    """Headline figures for the dashboard cards."""

    portfolio_value: float
    cash: float
    buying_power: float
    equity: float
    total_return_pct: float
    total_return_dollars: float
    market_exposure_pct: float
    unrealized_pnl: Optional[float] = None
    position_pnl_pct: dict[str, float] = field(default_factory=dict)
    as_of: Optional[datetime] = None


@dataclass
class CacheStatusItem:
    """Operator-facing view of one cache entry."""

    key: str
    age_seconds: float
    ttl_seconds: float
    valid: bool


@dataclass
class SyncSummary:
    """Result of syncing brokerage data into the relational store."""

    user_id: str
    positions: int
    orders: int
    portfolio_value: float
    synced_at: datetime
