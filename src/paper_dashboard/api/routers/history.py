"""Portfolio value and position history endpoints."""

from fastapi import APIRouter, Depends

from paper_dashboard.api.deps import get_dashboard_service
from paper_dashboard.api.schemas import (
    HistoryPointResponse,
    PortfolioHistoryResponse,
    PositionHistoryPointResponse,
    PositionHistoryResponse,
)
from paper_dashboard.services import DashboardService

router = APIRouter(tags=["history"])


@router.get("/portfolio-history", response_model=PortfolioHistoryResponse)
def get_portfolio_history(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> PortfolioHistoryResponse:
    """Hourly portfolio value with the change from the previous checkpoint."""
    points = dashboard.get_portfolio_history()
    if points is None:
        return PortfolioHistoryResponse(available=False)
    return PortfolioHistoryResponse(
        available=True,
        points=[HistoryPointResponse.model_validate(p) for p in points],
    )


@router.get("/position-history", response_model=PositionHistoryResponse)
def get_position_history(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> PositionHistoryResponse:
    """Open positions at every checkpoint, reconstructed from fills."""
    points = dashboard.get_position_history()
    if points is None:
        return PositionHistoryResponse(available=False)
    return PositionHistoryResponse(
        available=True,
        points=[PositionHistoryPointResponse.model_validate(p) for p in points],
    )
