"""Pydantic schemas for price and benchmark endpoints."""

from datetime import datetime

from pydantic import BaseModel


class PricePointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    price: float
    synthetic: bool = False


class PriceSeriesResponse(BaseModel):
    """
    Hourly price series for one symbol.

    synthetic is True when the series was generated from the symbol's fills
    because the price-bar provider had no data; such points are not market data.
    """

    available: bool
    symbol: str
    synthetic: bool = False
    points: list[PricePointResponse] = []


class BarResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    close: float


class BenchmarkBarsResponse(BaseModel):
    available: bool
    symbol: str
    bars: list[BarResponse] = []


class BenchmarkPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    label: str
    portfolio_return: float
    benchmark_return: float


class BenchmarkComparisonResponse(BaseModel):
    """Percent returns of portfolio and benchmark since the first comparable checkpoint."""

    available: bool
    symbol: str
    points: list[BenchmarkPointResponse] = []
