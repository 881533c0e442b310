"""Records written to the relational store by the brokerage sync."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class SyncedPosition:
    """Snapshot of an open brokerage position for one user."""

    user_id: str
    symbol: str
    quantity: float
    average_price: float
    current_price: float
    total_value: float
    unrealized_pnl: float
    realized_pnl: float = 0.0
    synced_at: Optional[datetime] = None


@dataclass
class TradingLog:
    """An order recorded as a trading-log row."""

    user_id: str
    action: str
    symbol: str
    quantity: Decimal
    timestamp: datetime
    price: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    reason: Optional[str] = None
    confidence_score: float = 0.5
    status: Optional[str] = None
    order_id: Optional[str] = None


@dataclass
class PerformanceMetric:
    """Daily account performance for one user; one row per (user, date)."""

    user_id: str
    date: date
    total_portfolio_value: float
    daily_pnl: Optional[float] = None
    total_pnl: Optional[float] = None
    win_rate: Optional[float] = None
    total_trades: int = 0
    updated_at: Optional[datetime] = field(default=None)
