"""Pydantic schemas for dashboard, cache status and sync endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DashboardSummaryData(BaseModel):
    model_config = {"from_attributes": True}

    portfolio_value: float
    cash: float
    buying_power: float
    equity: float
    total_return_pct: float
    total_return_dollars: float
    market_exposure_pct: float
    unrealized_pnl: Optional[float] = None
    position_pnl_pct: dict[str, float] = {}
    as_of: Optional[datetime] = None


class DashboardResponse(BaseModel):
    """Response schema for the dashboard summary cards."""

    available: bool
    summary: Optional[DashboardSummaryData] = None


class CacheStatusItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    key: str
    age_seconds: float
    ttl_seconds: float
    valid: bool


class CacheStatusResponse(BaseModel):
    """Every cache key with its age and validity, sorted by key."""

    entries: list[CacheStatusItemResponse]
    count: int


class SyncRequest(BaseModel):
    """Request schema for syncing brokerage data."""

    user_id: str = Field(..., min_length=1, max_length=64, description="User whose rows are replaced")


class SyncResponse(BaseModel):
    """Response schema for a completed sync."""

    model_config = {"from_attributes": True}

    user_id: str
    positions: int
    orders: int
    portfolio_value: float
    synced_at: datetime
