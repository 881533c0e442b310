"""View models for reconstructed position history and price series."""

from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union


@dataclass(frozen=True)
class OpenPosition:
    """Symbol held with a nonzero net share count."""

    shares: Decimal

    @property
    def is_open(self) -> bool:
        return True


@dataclass(frozen=True)
class ClosedPosition:
    """Symbol whose net share count returned to exactly zero."""

    @property
    def is_open(self) -> bool:
        return False


CLOSED = ClosedPosition()

PositionState = Union[OpenPosition, ClosedPosition]


@dataclass(frozen=True)
class PositionSnapshot:
    """
    Net holdings at one valuation checkpoint.

    positions maps every symbol traded up to the checkpoint to either
    OpenPosition(shares) or CLOSED. Charts that only want held symbols
    use open_positions(), where closed symbols are absent.
    """

    timestamp: datetime
    value: float
    positions: dict[str, PositionState] = field(default_factory=dict)

    def open_positions(self) -> dict[str, Decimal]:
        return {
            symbol: state.shares
            for symbol, state in self.positions.items()
            if isinstance(state, OpenPosition)
        }

    def state_of(self, symbol: str) -> Optional[PositionState]:
        return self.positions.get(symbol)


@dataclass(frozen=True)
class PricePoint:
    """A single price observation; synthetic points are never market data."""

    timestamp: datetime
    price: float
    synthetic: bool = False


@dataclass
class PriceSeries:
    """Ascending price points for one symbol."""

    symbol: str
    points: list[PricePoint] = field(default_factory=list)
    synthetic: bool = False

    def price_at(self, when: datetime) -> Optional[PricePoint]:
        """Return the latest point at or before `when`, or None."""
        idx = bisect_right([p.timestamp for p in self.points], when)
        if idx == 0:
            return None
        return self.points[idx - 1]


@dataclass
class HistoryPoint:
    """Portfolio value at an hourly checkpoint, with change from the previous one."""

    timestamp: datetime
    label: str
    value: float
    pnl: float


@dataclass
class PositionValuation:
    """One open position valued at a checkpoint."""

    symbol: str
    shares: Decimal
    price: Optional[float] = None
    market_value: Optional[float] = None
    synthetic: bool = False


@dataclass
class PositionHistoryPoint:
    """Open positions and their values at one checkpoint."""

    timestamp: datetime
    label: str
    total_value: float
    positions: list[PositionValuation] = field(default_factory=list)


@dataclass
class BenchmarkPoint:
    """Portfolio and benchmark return (percent) since the first comparable point."""

    timestamp: datetime
    label: str
    portfolio_return: float
    benchmark_return: float
