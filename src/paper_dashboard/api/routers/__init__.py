"""API routers package."""

from paper_dashboard.api.routers.account import router as account_router
from paper_dashboard.api.routers.history import router as history_router
from paper_dashboard.api.routers.prices import router as prices_router
from paper_dashboard.api.routers.dashboard import router as dashboard_router
from paper_dashboard.api.routers.sync import router as sync_router
from paper_dashboard.api.routers.reasoning import router as reasoning_router

__all__ = [
    "account_router",
    "history_router",
    "prices_router",
    "dashboard_router",
    "sync_router",
    "reasoning_router",
]
