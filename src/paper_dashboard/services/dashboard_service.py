"""Dashboard composition: summary cards, activity log and history charts."""

import logging
from datetime import datetime
from typing import Optional

from paper_dashboard.core.timezone import now_utc
from paper_dashboard.domain.views import (
    ActivityLogEntry,
    BenchmarkPoint,
    DashboardSummary,
    HistoryPoint,
    PositionHistoryPoint,
    PositionValuation,
    PriceSeries,
)
from paper_dashboard.services.benchmark import BENCHMARK_LOOKBACK, compare_to_benchmark
from paper_dashboard.services.brokerage_service import BrokerageService
from paper_dashboard.services.position_history import hour_label, reconstruct, with_pnl
from paper_dashboard.services.price_history_service import PriceHistoryService

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Builds each dashboard section from cached brokerage and price data.

    Sections are independent: each returns None when its inputs are
    unavailable so the rest of the dashboard still renders.
    """

    def __init__(
        self,
        brokerage: BrokerageService,
        prices: PriceHistoryService,
        starting_capital: float = 100000.0,
        benchmark_max_gap_hours: float = 2.0,
    ):
        self._brokerage = brokerage
        self._prices = prices
        self._starting_capital = starting_capital
        self._benchmark_max_gap_hours = benchmark_max_gap_hours

    @property
    def brokerage(self) -> BrokerageService:
        return self._brokerage

    @property
    def prices(self) -> PriceHistoryService:
        return self._prices

    def get_summary(self) -> Optional[DashboardSummary]:
        """
        Headline figures. Total return is measured against the first
        portfolio-history checkpoint, or the configured starting capital when
        there is no history.
        """
        account = self._brokerage.get_account()
        if account is None:
            return None

        checkpoints = self._brokerage.get_checkpoints() or []
        initial_value = checkpoints[0].value if checkpoints else self._starting_capital
        total_return_dollars = account.portfolio_value - initial_value
        total_return_pct = total_return_dollars / initial_value * 100 if initial_value > 0 else 0.0

        positions = self._brokerage.get_positions()
        unrealized_pnl = None
        position_pnl_pct: dict[str, float] = {}
        if positions is not None:
            unrealized_pnl = sum(p.unrealized_pl for p in positions)
            for p in positions:
                pct = p.pnl_percent
                if pct is not None:
                    position_pnl_pct[p.symbol] = pct

        return DashboardSummary(
            portfolio_value=account.portfolio_value,
            cash=account.cash,
            buying_power=account.buying_power,
            equity=account.equity,
            total_return_pct=total_return_pct,
            total_return_dollars=total_return_dollars,
            market_exposure_pct=account.market_exposure_pct,
            unrealized_pnl=unrealized_pnl,
            position_pnl_pct=position_pnl_pct,
            as_of=now_utc(),
        )

    def get_activity_log(self, limit: int = 50) -> Optional[list[ActivityLogEntry]]:
        orders = self._brokerage.get_orders()
        if orders is None:
            return None
        return [
            ActivityLogEntry(
                order_id=order.order_id,
                title=f"{order.symbol} {order.side.value}",
                action=order.side.value,
                symbol=order.symbol,
                quantity=order.quantity,
                price=order.price,
                total_value=order.total_value,
                order_type=order.order_type,
                status=order.status,
                timestamp=order.timestamp,
            )
            for order in orders[:limit]
        ]

    def get_portfolio_history(self) -> Optional[list[HistoryPoint]]:
        checkpoints = self._brokerage.get_checkpoints()
        if checkpoints is None:
            return None
        return with_pnl(checkpoints)

    def get_position_history(self, now: Optional[datetime] = None) -> Optional[list[PositionHistoryPoint]]:
        """
        Open positions at each checkpoint, each valued at the latest price at
        or before the checkpoint. Prices may be synthetic; such valuations are
        flagged.
        """
        checkpoints = self._brokerage.get_checkpoints()
        fills = self._brokerage.get_fills()
        if not checkpoints or fills is None:
            return None

        snapshots = reconstruct(fills, checkpoints)
        symbols = sorted({symbol for snap in snapshots for symbol in snap.open_positions()})

        start, end = checkpoints[0].timestamp, checkpoints[-1].timestamp
        series: dict[str, Optional[PriceSeries]] = {
            symbol: self._prices.get_price_series(symbol, start, end, fills=fills, now=now)
            for symbol in symbols
        }

        history = []
        for snap in snapshots:
            valuations = []
            for symbol, shares in snap.open_positions().items():
                valuation = PositionValuation(symbol=symbol, shares=shares)
                symbol_series = series.get(symbol)
                point = symbol_series.price_at(snap.timestamp) if symbol_series else None
                if point is not None:
                    valuation.price = point.price
                    valuation.market_value = float(shares) * point.price
                    valuation.synthetic = point.synthetic
                if point is None:
                    logger.debug("No price for %s at %s", symbol, snap.timestamp)
                valuations.append(valuation)
            history.append(
                PositionHistoryPoint(
                    timestamp=snap.timestamp,
                    label=hour_label(snap.timestamp),
                    total_value=snap.value,
                    positions=valuations,
                )
            )
        return history

    def get_benchmark_comparison(self) -> Optional[list[BenchmarkPoint]]:
        """
        Portfolio against benchmark returns. None when there is nothing to
        compare, so an empty chart never reads as a flat 0%.
        """
        checkpoints = self._brokerage.get_checkpoints()
        if not checkpoints:
            return None
        bars = self._prices.get_benchmark_bars(
            checkpoints[0].timestamp - BENCHMARK_LOOKBACK,
            checkpoints[-1].timestamp,
        )
        if bars is None:
            return None
        points = compare_to_benchmark(checkpoints, bars, max_gap_hours=self._benchmark_max_gap_hours)
        if not points:
            logger.info("No benchmark bars line up with the portfolio history")
            return None
        return points
