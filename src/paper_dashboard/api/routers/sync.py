"""Brokerage-to-database sync endpoint."""

from fastapi import APIRouter, Depends

from paper_dashboard.api.deps import get_sync_service
from paper_dashboard.api.schemas import SyncRequest, SyncResponse
from paper_dashboard.services import SyncService

router = APIRouter(tags=["sync"])


@router.post("/sync", response_model=SyncResponse)
def sync_brokerage(
    data: SyncRequest,
    sync_service: SyncService = Depends(get_sync_service),
) -> SyncResponse:
    """
    Replace the user's stored positions and trading logs with the brokerage's
    current data and upsert today's performance metrics.
    """
    summary = sync_service.sync(data.user_id)
    return SyncResponse.model_validate(summary)
