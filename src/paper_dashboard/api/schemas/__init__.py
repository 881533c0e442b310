"""Pydantic schemas for API request/response."""

from paper_dashboard.api.schemas.account import (
    AccountData,
    AccountResponse,
    PositionData,
    PositionsResponse,
    ActivityLogItem,
    ActivityLogResponse,
)
from paper_dashboard.api.schemas.history import (
    HistoryPointResponse,
    PortfolioHistoryResponse,
    PositionValuationResponse,
    PositionHistoryPointResponse,
    PositionHistoryResponse,
)
from paper_dashboard.api.schemas.prices import (
    PricePointResponse,
    PriceSeriesResponse,
    BarResponse,
    BenchmarkBarsResponse,
    BenchmarkPointResponse,
    BenchmarkComparisonResponse,
)
from paper_dashboard.api.schemas.dashboard import (
    DashboardSummaryData,
    DashboardResponse,
    CacheStatusItemResponse,
    CacheStatusResponse,
    SyncRequest,
    SyncResponse,
)
from paper_dashboard.api.schemas.reasoning import ReasoningEntryResponse, ReasoningResponse

__all__ = [
    "AccountData",
    "AccountResponse",
    "PositionData",
    "PositionsResponse",
    "ActivityLogItem",
    "ActivityLogResponse",
    "HistoryPointResponse",
    "PortfolioHistoryResponse",
    "PositionValuationResponse",
    "PositionHistoryPointResponse",
    "PositionHistoryResponse",
    "PricePointResponse",
    "PriceSeriesResponse",
    "BarResponse",
    "BenchmarkBarsResponse",
    "BenchmarkPointResponse",
    "BenchmarkComparisonResponse",
    "DashboardSummaryData",
    "DashboardResponse",
    "CacheStatusItemResponse",
    "CacheStatusResponse",
    "SyncRequest",
    "SyncResponse",
    "ReasoningEntryResponse",
    "ReasoningResponse",
]
