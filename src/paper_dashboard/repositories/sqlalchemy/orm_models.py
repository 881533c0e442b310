"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)

from paper_dashboard.core.timezone import now_utc
from paper_dashboard.repositories.sqlalchemy.database import Base


class PortfolioPositionORM(Base):
    """SQLAlchemy model for a synced open position."""

    __tablename__ = "portfolio_positions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    quantity = Column(Float, nullable=False)
    average_price = Column(Float, nullable=False)
    current_price = Column(Float, nullable=False)
    total_value = Column(Float, nullable=False)
    unrealized_pnl = Column(Float, nullable=False)
    realized_pnl = Column(Float, nullable=False, default=0.0)
    synced_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)


class TradingLogORM(Base):
    """SQLAlchemy model for a synced order (trading log)."""

    __tablename__ = "trading_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    order_id = Column(String(64), nullable=True)
    action = Column(String(8), nullable=False)
    symbol = Column(String(20), nullable=False)
    quantity = Column(Numeric(precision=18, scale=8), nullable=False)
    price = Column(Numeric(precision=18, scale=4), nullable=True)
    total_value = Column(Numeric(precision=18, scale=4), nullable=True)
    reason = Column(Text, nullable=True)
    confidence_score = Column(Float, nullable=False, default=0.5)
    status = Column(String(32), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)


class PerformanceMetricORM(Base):
    """SQLAlchemy model for daily performance metrics."""

    __tablename__ = "performance_metrics"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_performance_user_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    date = Column(Date, nullable=False)
    total_portfolio_value = Column(Float, nullable=False)
    daily_pnl = Column(Float, nullable=True)
    total_pnl = Column(Float, nullable=True)
    win_rate = Column(Float, nullable=True)
    total_trades = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc)
