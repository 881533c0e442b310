"""Sync repository protocol."""

from datetime import date
from typing import Optional, Protocol

from paper_dashboard.domain.models import PerformanceMetric, SyncedPosition, TradingLog


class SyncRepository(Protocol):
    """Interface for persisting synced brokerage data per user."""

    def replace_positions(self, user_id: str, positions: list[SyncedPosition]) -> None:
        """Delete the user's positions and insert the given ones."""
        ...

    def list_positions(self, user_id: str) -> list[SyncedPosition]:
        ...

    def replace_trading_logs(self, user_id: str, logs: list[TradingLog]) -> None:
        """Delete the user's trading logs and insert the given ones."""
        ...

    def list_trading_logs(self, user_id: str) -> list[TradingLog]:
        """Trading logs newest first."""
        ...

    def upsert_performance_metric(self, metric: PerformanceMetric) -> PerformanceMetric:
        """Insert or update the (user, date) metric row."""
        ...

    def get_performance_metric(self, user_id: str, day: date) -> Optional[PerformanceMetric]:
        ...

    def save_sync(
        self,
        user_id: str,
        positions: list[SyncedPosition],
        logs: list[TradingLog],
        metric: PerformanceMetric,
    ) -> PerformanceMetric:
        """Replace positions and logs and upsert the metric atomically."""
        ...
