"""Dashboard summary, cache status and snapshot endpoints."""

from fastapi import APIRouter, Depends

from paper_dashboard.api.deps import get_cache, get_dashboard_service, get_snapshot_exporter
from paper_dashboard.api.schemas import (
    CacheStatusItemResponse,
    CacheStatusResponse,
    DashboardResponse,
    DashboardSummaryData,
)
from paper_dashboard.export import DashboardSnapshot, SnapshotExporter
from paper_dashboard.services import DashboardService, ResponseCache

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """Headline figures for the dashboard cards."""
    summary = dashboard.get_summary()
    if summary is None:
        return DashboardResponse(available=False)
    return DashboardResponse(available=True, summary=DashboardSummaryData.model_validate(summary))


@router.get("/cache/status", response_model=CacheStatusResponse)
def get_cache_status(
    cache: ResponseCache = Depends(get_cache),
) -> CacheStatusResponse:
    """List cached keys with age and validity. Read-only."""
    items = cache.status()
    return CacheStatusResponse(
        entries=[CacheStatusItemResponse.model_validate(i) for i in items],
        count=len(items),
    )


@router.get("/snapshot", response_model=DashboardSnapshot)
def get_snapshot(
    exporter: SnapshotExporter = Depends(get_snapshot_exporter),
) -> DashboardSnapshot:
    """The whole dashboard payload as one JSON document."""
    return exporter.build()
