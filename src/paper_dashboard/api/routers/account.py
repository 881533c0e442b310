"""Account, positions and activity log endpoints."""

from fastapi import APIRouter, Depends, Query

from paper_dashboard.api.deps import get_brokerage_service, get_dashboard_service
from paper_dashboard.api.schemas import (
    AccountData,
    AccountResponse,
    ActivityLogItem,
    ActivityLogResponse,
    PositionData,
    PositionsResponse,
)
from paper_dashboard.services import BrokerageService, DashboardService

router = APIRouter(tags=["account"])


@router.get("/account", response_model=AccountResponse)
def get_account(
    brokerage: BrokerageService = Depends(get_brokerage_service),
) -> AccountResponse:
    """Account balances, or available=false when the brokerage has no data."""
    account = brokerage.get_account()
    if account is None:
        return AccountResponse(available=False)
    return AccountResponse(available=True, account=AccountData.model_validate(account))


@router.get("/positions", response_model=PositionsResponse)
def get_positions(
    brokerage: BrokerageService = Depends(get_brokerage_service),
) -> PositionsResponse:
    """Current open positions."""
    positions = brokerage.get_positions()
    if positions is None:
        return PositionsResponse(available=False)
    return PositionsResponse(
        available=True,
        positions=[PositionData.model_validate(p) for p in positions],
        count=len(positions),
    )


@router.get("/orders", response_model=ActivityLogResponse)
def get_orders(
    limit: int = Query(50, ge=1, le=500, description="Maximum number of orders to return"),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActivityLogResponse:
    """Recent orders, newest first, including unfilled ones."""
    entries = dashboard.get_activity_log(limit=limit)
    if entries is None:
        return ActivityLogResponse(available=False)
    return ActivityLogResponse(
        available=True,
        orders=[ActivityLogItem.model_validate(e) for e in entries],
        count=len(entries),
    )
