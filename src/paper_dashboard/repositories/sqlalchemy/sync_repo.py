"""SQLAlchemy implementation of SyncRepository."""

from datetime import date
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paper_dashboard.core.timezone import now_utc, to_utc
from paper_dashboard.domain.models import PerformanceMetric, SyncedPosition, TradingLog
from paper_dashboard.repositories.sqlalchemy.orm_models import (
    PerformanceMetricORM,
    PortfolioPositionORM,
    TradingLogORM,
)


class SqlAlchemySyncRepository:
    """SQLAlchemy-backed store for synced positions, trading logs and metrics."""

    def __init__(self, db: Session):
        self._db = db

    # Positions

    def replace_positions(self, user_id: str, positions: list[SyncedPosition]) -> None:
        """Delete the user's positions and insert the given ones in one commit."""
        self._stage_positions(user_id, positions)
        self._db.commit()

    def _stage_positions(self, user_id: str, positions: list[SyncedPosition]) -> None:
        self._db.query(PortfolioPositionORM).filter(
            PortfolioPositionORM.user_id == user_id
        ).delete()
        for position in positions:
            self._db.add(
                PortfolioPositionORM(
                    user_id=user_id,
                    symbol=position.symbol,
                    quantity=position.quantity,
                    average_price=position.average_price,
                    current_price=position.current_price,
                    total_value=position.total_value,
                    unrealized_pnl=position.unrealized_pnl,
                    realized_pnl=position.realized_pnl,
                    synced_at=position.synced_at or now_utc(),
                )
            )

    def list_positions(self, user_id: str) -> list[SyncedPosition]:
        rows = (
            self._db.query(PortfolioPositionORM)
            .filter(PortfolioPositionORM.user_id == user_id)
            .order_by(PortfolioPositionORM.symbol)
            .all()
        )
        return [self._position_to_domain(r) for r in rows]

    # Trading logs

    def replace_trading_logs(self, user_id: str, logs: list[TradingLog]) -> None:
        """Delete the user's trading logs and insert the given ones in one commit."""
        self._stage_trading_logs(user_id, logs)
        self._db.commit()

    def _stage_trading_logs(self, user_id: str, logs: list[TradingLog]) -> None:
        self._db.query(TradingLogORM).filter(TradingLogORM.user_id == user_id).delete()
        for log in logs:
            self._db.add(
                TradingLogORM(
                    user_id=user_id,
                    order_id=log.order_id,
                    action=log.action,
                    symbol=log.symbol,
                    quantity=log.quantity,
                    price=log.price,
                    total_value=log.total_value,
                    reason=log.reason,
                    confidence_score=log.confidence_score,
                    status=log.status,
                    timestamp=log.timestamp,
                )
            )

    def list_trading_logs(self, user_id: str) -> list[TradingLog]:
        rows = (
            self._db.query(TradingLogORM)
            .filter(TradingLogORM.user_id == user_id)
            .order_by(TradingLogORM.timestamp.desc(), TradingLogORM.id)
            .all()
        )
        return [self._log_to_domain(r) for r in rows]

    # Performance metrics

    def upsert_performance_metric(self, metric: PerformanceMetric) -> PerformanceMetric:
        """Insert or update the metric row for (user_id, date)."""
        orm_metric = self._stage_performance_metric(metric)
        self._db.commit()
        self._db.refresh(orm_metric)
        return self._metric_to_domain(orm_metric)

    def _stage_performance_metric(self, metric: PerformanceMetric) -> PerformanceMetricORM:
        orm_metric = (
            self._db.query(PerformanceMetricORM)
            .filter(
                PerformanceMetricORM.user_id == metric.user_id,
                PerformanceMetricORM.date == metric.date,
            )
            .first()
        )

        if orm_metric:
            orm_metric.total_portfolio_value = metric.total_portfolio_value
            orm_metric.daily_pnl = metric.daily_pnl
            orm_metric.total_pnl = metric.total_pnl
            orm_metric.win_rate = metric.win_rate
            orm_metric.total_trades = metric.total_trades
            if metric.updated_at is not None:
                orm_metric.updated_at = metric.updated_at
        else:
            orm_metric = PerformanceMetricORM(
                user_id=metric.user_id,
                date=metric.date,
                total_portfolio_value=metric.total_portfolio_value,
                daily_pnl=metric.daily_pnl,
                total_pnl=metric.total_pnl,
                win_rate=metric.win_rate,
                total_trades=metric.total_trades,
                updated_at=metric.updated_at or now_utc(),
            )
            self._db.add(orm_metric)
        return orm_metric

    def get_performance_metric(self, user_id: str, day: date) -> Optional[PerformanceMetric]:
        orm_metric = (
            self._db.query(PerformanceMetricORM)
            .filter(
                PerformanceMetricORM.user_id == user_id,
                PerformanceMetricORM.date == day,
            )
            .first()
        )
        return self._metric_to_domain(orm_metric) if orm_metric else None

    # Whole sync

    def save_sync(
        self,
        user_id: str,
        positions: list[SyncedPosition],
        logs: list[TradingLog],
        metric: PerformanceMetric,
    ) -> PerformanceMetric:
        """
        Replace positions and trading logs and upsert the metric in a single
        commit. On any database error the transaction is rolled back and the
        previously stored rows are left as they were.
        """
        try:
            self._stage_positions(user_id, positions)
            self._stage_trading_logs(user_id, logs)
            orm_metric = self._stage_performance_metric(metric)
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._db.refresh(orm_metric)
        return self._metric_to_domain(orm_metric)

    # Mapping helpers

    @staticmethod
    def _position_to_domain(orm: PortfolioPositionORM) -> SyncedPosition:
        return SyncedPosition(
            user_id=orm.user_id,
            symbol=orm.symbol,
            quantity=orm.quantity,
            average_price=orm.average_price,
            current_price=orm.current_price,
            total_value=orm.total_value,
            unrealized_pnl=orm.unrealized_pnl,
            realized_pnl=orm.realized_pnl,
            synced_at=to_utc(orm.synced_at) if orm.synced_at else None,
        )

    @staticmethod
    def _log_to_domain(orm: TradingLogORM) -> TradingLog:
        return TradingLog(
            user_id=orm.user_id,
            order_id=orm.order_id,
            action=orm.action,
            symbol=orm.symbol,
            quantity=orm.quantity,
            price=orm.price,
            total_value=orm.total_value,
            reason=orm.reason,
            confidence_score=orm.confidence_score,
            status=orm.status,
            timestamp=to_utc(orm.timestamp),
        )

    @staticmethod
    def _metric_to_domain(orm: PerformanceMetricORM) -> PerformanceMetric:
        return PerformanceMetric(
            user_id=orm.user_id,
            date=orm.date,
            total_portfolio_value=orm.total_portfolio_value,
            daily_pnl=orm.daily_pnl,
            total_pnl=orm.total_pnl,
            win_rate=orm.win_rate,
            total_trades=orm.total_trades,
            updated_at=to_utc(orm.updated_at) if orm.updated_at else None,
        )
