"""Fill, valuation checkpoint and price bar models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from paper_dashboard.domain.models.enums import OrderSide


@dataclass(frozen=True)
class Fill:
    """
    Order execution record from the brokerage's order history.

    price is None while the order is unfilled or pending.
    Quantities are Decimal so replayed sums are exact.
    """

    symbol: str
    side: OrderSide
    quantity: Decimal
    timestamp: datetime
    price: Optional[Decimal] = None
    order_id: Optional[str] = None
    order_type: Optional[str] = None
    status: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side.upper()))

    @property
    def is_executed(self) -> bool:
        return self.price is not None

    @property
    def signed_quantity(self) -> Decimal:
        """BUY adds to the position, SELL subtracts."""
        return self.quantity if self.side == OrderSide.BUY else -self.quantity

    @property
    def total_value(self) -> Optional[Decimal]:
        if self.price is None:
            return None
        return self.price * self.quantity


@dataclass(frozen=True)
class ValuationCheckpoint:
    """Total portfolio value sampled at a point in time."""

    timestamp: datetime
    value: float


@dataclass(frozen=True)
class PriceBar:
    """Hourly closing price for a symbol."""

    timestamp: datetime
    close: float
