"""Pydantic schemas for account, positions and orders endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class AccountData(BaseModel):
    """Account balances."""

    model_config = {"from_attributes": True}

    portfolio_value: float
    cash: float
    buying_power: float
    equity: float
    last_equity: Optional[float] = None
    account_number: Optional[str] = None
    status: Optional[str] = None
    invested_amount: float
    market_exposure_pct: float


class AccountResponse(BaseModel):
    """Response schema for the account section."""

    available: bool
    account: Optional[AccountData] = None


class PositionData(BaseModel):
    """Response schema for a single open position."""

    model_config = {"from_attributes": True}

    symbol: str
    qty: float
    side: str
    market_value: float
    cost_basis: float
    avg_entry_price: float
    unrealized_pl: float
    unrealized_plpc: float
    current_price: float
    pnl_percent: Optional[float] = None


class PositionsResponse(BaseModel):
    """Response schema for positions listing."""

    available: bool
    positions: list[PositionData] = []
    count: int = 0


class ActivityLogItem(BaseModel):
    """Response schema for one order in the activity log."""

    model_config = {"from_attributes": True}

    order_id: Optional[str] = None
    title: str
    action: str
    symbol: str
    quantity: Decimal
    price: Optional[Decimal] = None
    total_value: Optional[Decimal] = None
    order_type: Optional[str] = None
    status: Optional[str] = None
    timestamp: datetime


class ActivityLogResponse(BaseModel):
    """Response schema for the activity log."""

    available: bool
    orders: list[ActivityLogItem] = []
    count: int = 0
