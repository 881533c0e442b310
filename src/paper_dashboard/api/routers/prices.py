"""Price series and benchmark endpoints."""

from fastapi import APIRouter, Depends, Query

from paper_dashboard.api.deps import get_dashboard_service
from paper_dashboard.api.schemas import (
    BarResponse,
    BenchmarkBarsResponse,
    BenchmarkComparisonResponse,
    BenchmarkPointResponse,
    PricePointResponse,
    PriceSeriesResponse,
)
from paper_dashboard.core.exceptions import ValidationError
from paper_dashboard.core.timezone import parse_date
from paper_dashboard.services import DashboardService

router = APIRouter(tags=["prices"])


def _parse_range(start: str, end: str):
    try:
        return parse_date(start), parse_date(end)
    except ValueError as exc:
        raise ValidationError(f"Invalid date range: {exc}") from exc


@router.get("/prices/{symbol}", response_model=PriceSeriesResponse)
def get_prices(
    symbol: str,
    start: str = Query(..., description="Start date (ISO date or datetime)"),
    end: str = Query(..., description="End date (ISO date or datetime)"),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> PriceSeriesResponse:
    """
    Hourly prices for a symbol. When the provider has no bars, a synthetic
    series is built from the symbol's fills and flagged as such.
    """
    start_date, end_date = _parse_range(start, end)
    symbol = symbol.strip().upper()
    fills = dashboard.brokerage.get_fills()
    series = dashboard.prices.get_price_series(symbol, start_date, end_date, fills=fills)
    if series is None:
        return PriceSeriesResponse(available=False, symbol=symbol)
    return PriceSeriesResponse(
        available=True,
        symbol=series.symbol,
        synthetic=series.synthetic,
        points=[PricePointResponse.model_validate(p) for p in series.points],
    )


@router.get("/benchmark", response_model=BenchmarkBarsResponse)
def get_benchmark(
    start: str = Query(..., description="Start date (ISO date or datetime)"),
    end: str = Query(..., description="End date (ISO date or datetime)"),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> BenchmarkBarsResponse:
    """Hourly benchmark bars (cached under the long TTL)."""
    start_date, end_date = _parse_range(start, end)
    symbol = dashboard.prices.benchmark_symbol
    bars = dashboard.prices.get_benchmark_bars(start_date, end_date)
    if bars is None:
        return BenchmarkBarsResponse(available=False, symbol=symbol)
    return BenchmarkBarsResponse(
        available=True,
        symbol=symbol,
        bars=[BarResponse.model_validate(b) for b in bars],
    )


@router.get("/benchmark/comparison", response_model=BenchmarkComparisonResponse)
def get_benchmark_comparison(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> BenchmarkComparisonResponse:
    """Portfolio return against the benchmark over the portfolio history window."""
    symbol = dashboard.prices.benchmark_symbol
    points = dashboard.get_benchmark_comparison()
    if points is None:
        return BenchmarkComparisonResponse(available=False, symbol=symbol)
    return BenchmarkComparisonResponse(
        available=True,
        symbol=symbol,
        points=[BenchmarkPointResponse.model_validate(p) for p in points],
    )
