"""Service layer - caching, reconstruction and dashboard composition."""

from paper_dashboard.services.response_cache import ResponseCache, make_cache_key
from paper_dashboard.services.position_history import build_checkpoints, reconstruct, with_pnl
from paper_dashboard.services.synthetic_prices import generate_synthetic_series
from paper_dashboard.services.brokerage_service import BrokerageService
from paper_dashboard.services.price_history_service import PriceHistoryService
from paper_dashboard.services.dashboard_service import DashboardService
from paper_dashboard.services.sync_service import SyncService
from paper_dashboard.services.reasoning_service import ReasoningService, parse_reasoning_csv

__all__ = [
    "ResponseCache",
    "make_cache_key",
    "build_checkpoints",
    "reconstruct",
    "with_pnl",
    "generate_synthetic_series",
    "BrokerageService",
    "PriceHistoryService",
    "DashboardService",
    "SyncService",
    "ReasoningService",
    "parse_reasoning_csv",
]
