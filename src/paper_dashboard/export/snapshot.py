"""JSON snapshot export of the dashboard data."""

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from paper_dashboard.core.timezone import now_utc
from paper_dashboard.services.benchmark import BENCHMARK_LOOKBACK
from paper_dashboard.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "snapshot.json"


class SnapshotAccount(BaseModel):
    portfolio_value: float
    cash: float
    buying_power: float
    equity: float
    account_number: Optional[str] = None
    status: Optional[str] = None


class SnapshotPosition(BaseModel):
    symbol: str
    qty: float
    side: str
    market_value: float
    cost_basis: float
    avg_entry_price: float
    unrealized_pl: float
    unrealized_plpc: float
    current_price: float
    asset_id: Optional[str] = None


class SnapshotCheckpoint(BaseModel):
    timestamp: datetime
    value: float


class SnapshotOrder(BaseModel):
    order_id: Optional[str] = None
    symbol: str
    side: str
    quantity: Decimal
    price: Optional[Decimal] = None
    order_type: Optional[str] = None
    status: Optional[str] = None
    timestamp: datetime


class SnapshotBar(BaseModel):
    t: datetime
    c: float


class SnapshotBenchmark(BaseModel):
    symbol: str
    bars: list[SnapshotBar]


class DashboardSnapshot(BaseModel):
    """
    Everything the static dashboard embeds, in one document.

    Sections that were unavailable at export time are null.
    """

    timestamp: datetime
    account: Optional[SnapshotAccount] = None
    positions: Optional[list[SnapshotPosition]] = None
    portfolio_history: Optional[list[SnapshotCheckpoint]] = None
    orders: Optional[list[SnapshotOrder]] = None
    benchmark: Optional[SnapshotBenchmark] = None


class SnapshotExporter:
    """Builds a DashboardSnapshot from the dashboard services and writes it as JSON."""

    def __init__(self, dashboard: DashboardService):
        self._dashboard = dashboard

    def build(self, now: Optional[datetime] = None) -> DashboardSnapshot:
        brokerage = self._dashboard.brokerage
        prices = self._dashboard.prices

        account = brokerage.get_account()
        positions = brokerage.get_positions()
        checkpoints = brokerage.get_checkpoints()
        orders = brokerage.get_orders()

        benchmark = None
        if checkpoints:
            start = checkpoints[0].timestamp - BENCHMARK_LOOKBACK
            bars = prices.get_benchmark_bars(start, checkpoints[-1].timestamp)
            if bars:
                benchmark = SnapshotBenchmark(
                    symbol=prices.benchmark_symbol,
                    bars=[SnapshotBar(t=b.timestamp, c=b.close) for b in bars],
                )
            else:
                logger.info("Snapshot has no benchmark bars for %s", prices.benchmark_symbol)

        return DashboardSnapshot(
            timestamp=now or now_utc(),
            account=SnapshotAccount(
                portfolio_value=account.portfolio_value,
                cash=account.cash,
                buying_power=account.buying_power,
                equity=account.equity,
                account_number=account.account_number,
                status=account.status,
            ) if account else None,
            positions=[
                SnapshotPosition(
                    symbol=p.symbol,
                    qty=p.qty,
                    side=p.side,
                    market_value=p.market_value,
                    cost_basis=p.cost_basis,
                    avg_entry_price=p.avg_entry_price,
                    unrealized_pl=p.unrealized_pl,
                    unrealized_plpc=p.unrealized_plpc,
                    current_price=p.current_price,
                    asset_id=p.asset_id,
                )
                for p in positions
            ] if positions is not None else None,
            portfolio_history=[
                SnapshotCheckpoint(timestamp=c.timestamp, value=c.value) for c in checkpoints
            ] if checkpoints is not None else None,
            orders=[
                SnapshotOrder(
                    order_id=o.order_id,
                    symbol=o.symbol,
                    side=o.side.value,
                    quantity=o.quantity,
                    price=o.price,
                    order_type=o.order_type,
                    status=o.status,
                    timestamp=o.timestamp,
                )
                for o in orders
            ] if orders is not None else None,
            benchmark=benchmark,
        )

    def export_json(self, path: str, now: Optional[datetime] = None) -> DashboardSnapshot:
        """
        Write the snapshot to a JSON file.

        Args:
            path: Output file path (parent directories are created)
            now: Optional snapshot timestamp (defaults to current UTC time)
        """
        snapshot = self.build(now=now)

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")

        logger.info("Wrote dashboard snapshot to %s", file_path)
        return snapshot
