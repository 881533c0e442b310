"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from paper_dashboard.config.settings import get_settings
from paper_dashboard.export import SnapshotExporter
from paper_dashboard.providers.brokerage_provider import BrokerageProvider
from paper_dashboard.providers.price_bar_provider import PriceBarProvider
from paper_dashboard.providers.reasoning_provider import ReasoningProvider
from paper_dashboard.repositories.sqlalchemy import SqlAlchemySyncRepository
from paper_dashboard.repositories.sqlalchemy.database import get_db
from paper_dashboard.services import (
    BrokerageService,
    DashboardService,
    PriceHistoryService,
    ReasoningService,
    ResponseCache,
    SyncService,
)


def get_cache(request: Request) -> ResponseCache:
    """Provide the process-wide ResponseCache created at startup."""
    return request.app.state.cache


def get_brokerage_provider(request: Request) -> BrokerageProvider:
    """Provide the BrokerageProvider created at startup."""
    return request.app.state.brokerage_provider


def get_price_bar_provider(request: Request) -> PriceBarProvider:
    """Provide the PriceBarProvider created at startup."""
    return request.app.state.price_bar_provider


def get_reasoning_provider(request: Request) -> ReasoningProvider:
    """Provide the ReasoningProvider created at startup."""
    return request.app.state.reasoning_provider


def get_sync_repo(db: Session = Depends(get_db)) -> SqlAlchemySyncRepository:
    """Provide SyncRepository instance."""
    return SqlAlchemySyncRepository(db)


def get_brokerage_service(
    provider: BrokerageProvider = Depends(get_brokerage_provider),
    cache: ResponseCache = Depends(get_cache),
) -> BrokerageService:
    """Provide BrokerageService instance."""
    settings = get_settings()
    return BrokerageService(
        provider=provider,
        cache=cache,
        orders_limit=settings.orders_limit,
        history_period=settings.history_period,
        history_timeframe=settings.history_timeframe,
        history_min_equity=settings.history_min_equity,
    )


def get_price_history_service(
    provider: PriceBarProvider = Depends(get_price_bar_provider),
    cache: ResponseCache = Depends(get_cache),
) -> PriceHistoryService:
    """Provide PriceHistoryService instance."""
    return PriceHistoryService(
        provider=provider,
        cache=cache,
        benchmark_symbol=get_settings().benchmark_symbol,
    )


def get_dashboard_service(
    brokerage: BrokerageService = Depends(get_brokerage_service),
    prices: PriceHistoryService = Depends(get_price_history_service),
) -> DashboardService:
    """Provide DashboardService instance."""
    settings = get_settings()
    return DashboardService(
        brokerage=brokerage,
        prices=prices,
        starting_capital=settings.starting_capital,
        benchmark_max_gap_hours=settings.benchmark_max_gap_hours,
    )


def get_sync_service(
    provider: BrokerageProvider = Depends(get_brokerage_provider),
    repo: SqlAlchemySyncRepository = Depends(get_sync_repo),
) -> SyncService:
    """Provide SyncService instance."""
    settings = get_settings()
    return SyncService(
        provider=provider,
        repo=repo,
        orders_limit=settings.orders_limit,
        starting_capital=settings.starting_capital,
    )


def get_snapshot_exporter(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> SnapshotExporter:
    """Provide SnapshotExporter instance."""
    return SnapshotExporter(dashboard=dashboard)


def get_reasoning_service(
    provider: ReasoningProvider = Depends(get_reasoning_provider),
    cache: ResponseCache = Depends(get_cache),
) -> ReasoningService:
    """Provide ReasoningService instance."""
    return ReasoningService(provider=provider, cache=cache)
