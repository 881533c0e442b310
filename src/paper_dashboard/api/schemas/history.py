"""Pydantic schemas for portfolio and position history endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class HistoryPointResponse(BaseModel):
    """Portfolio value at one hourly checkpoint."""

    model_config = {"from_attributes": True}

    timestamp: datetime
    label: str
    value: float
    pnl: float


class PortfolioHistoryResponse(BaseModel):
    available: bool
    points: list[HistoryPointResponse] = []


class PositionValuationResponse(BaseModel):
    """One open position valued at a checkpoint."""

    model_config = {"from_attributes": True}

    symbol: str
    shares: Decimal
    price: Optional[float] = None
    market_value: Optional[float] = None
    synthetic: bool = False


class PositionHistoryPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    label: str
    total_value: float
    positions: list[PositionValuationResponse]


class PositionHistoryResponse(BaseModel):
    """Open positions at each checkpoint; closed symbols are absent."""

    available: bool
    points: list[PositionHistoryPointResponse] = []
