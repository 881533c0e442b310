"""Sync brokerage positions, orders and daily metrics into the relational store."""

import logging
from datetime import datetime
from typing import Callable, Optional

from paper_dashboard.core.exceptions import UpstreamError, ValidationError
from paper_dashboard.core.timezone import now_utc
from paper_dashboard.domain.models import (
    AccountBalance,
    BrokeragePosition,
    Fill,
    PerformanceMetric,
    SyncedPosition,
    TradingLog,
)
from paper_dashboard.domain.views import SyncSummary
from paper_dashboard.providers.brokerage_provider import BrokerageProvider
from paper_dashboard.repositories.protocols import SyncRepository
from paper_dashboard.services.records import parse_account, parse_orders, parse_positions

logger = logging.getLogger(__name__)

FILLED_STATUS = "filled"


class SyncService:
    """
    Copies the current brokerage state for one user into the sync tables.

    All upstream data is fetched before anything is written, so a failed
    fetch leaves the stored rows untouched. Reads go straight to the
    provider; the response cache is not consulted.
    """

    def __init__(
        self,
        provider: BrokerageProvider,
        repo: SyncRepository,
        orders_limit: int = 50,
        starting_capital: float = 100000.0,
        now_fn: Optional[Callable[[], datetime]] = None,
    ):
        self._provider = provider
        self._repo = repo
        self._orders_limit = orders_limit
        self._starting_capital = starting_capital
        self._now = now_fn or now_utc

    def sync(self, user_id: str) -> SyncSummary:
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("user_id is required")

        positions_body = self._provider.get_positions()
        orders_body = self._provider.get_orders(limit=self._orders_limit)
        account = parse_account(self._provider.get_account())
        if account is None:
            raise UpstreamError("account", "unusable account body")
        if not isinstance(positions_body, list):
            raise UpstreamError("positions", "expected a list")
        if not isinstance(orders_body, list):
            raise UpstreamError("orders", "expected a list")

        positions = parse_positions(positions_body)
        orders = parse_orders(orders_body)
        synced_at = self._now()

        self._repo.save_sync(
            user_id,
            [self._to_synced_position(user_id, p, synced_at) for p in positions],
            [self._to_trading_log(user_id, o) for o in orders],
            self._build_metric(user_id, account, positions, orders, synced_at),
        )

        logger.info(
            "Synced %d positions and %d orders for user %s",
            len(positions),
            len(orders),
            user_id,
        )
        return SyncSummary(
            user_id=user_id,
            positions=len(positions),
            orders=len(orders),
            portfolio_value=account.portfolio_value,
            synced_at=synced_at,
        )

    @staticmethod
    def _to_synced_position(user_id: str, position: BrokeragePosition, synced_at: datetime) -> SyncedPosition:
        return SyncedPosition(
            user_id=user_id,
            symbol=position.symbol,
            quantity=position.qty,
            average_price=position.avg_entry_price,
            current_price=position.current_price,
            total_value=position.market_value,
            unrealized_pnl=position.unrealized_pl,
            realized_pnl=0.0,
            synced_at=synced_at,
        )

    @staticmethod
    def _to_trading_log(user_id: str, order: Fill) -> TradingLog:
        status = order.status or "unknown"
        side = order.side.value.lower()
        return TradingLog(
            user_id=user_id,
            order_id=order.order_id,
            action=order.side.value,
            symbol=order.symbol,
            quantity=order.quantity,
            price=order.price,
            total_value=order.total_value,
            reason=f"{order.order_type or 'unknown'} {side} order - {status}",
            confidence_score=1.0 if status == FILLED_STATUS else 0.5,
            status=order.status,
            timestamp=order.timestamp,
        )

    def _build_metric(
        self,
        user_id: str,
        account: AccountBalance,
        positions: list[BrokeragePosition],
        orders: list[Fill],
        synced_at: datetime,
    ) -> PerformanceMetric:
        winners = sum(1 for p in positions if p.unrealized_pl > 0)
        win_rate = winners / len(positions) if positions else 0.0
        daily_pnl = account.equity - account.last_equity if account.last_equity is not None else None

        return PerformanceMetric(
            user_id=user_id,
            date=synced_at.date(),
            total_portfolio_value=account.portfolio_value,
            daily_pnl=daily_pnl,
            total_pnl=account.equity - self._starting_capital,
            win_rate=win_rate,
            total_trades=sum(1 for o in orders if o.status == FILLED_STATUS),
            updated_at=synced_at,
        )
