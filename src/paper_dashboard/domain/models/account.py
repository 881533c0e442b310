"""Brokerage account and position models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class AccountBalance:
    """Account balances as reported by the brokerage (all USD)."""

    portfolio_value: float
    cash: float
    buying_power: float
    equity: float
    last_equity: Optional[float] = None
    account_number: Optional[str] = None
    status: Optional[str] = None

    @property
    def invested_amount(self) -> float:
        return self.portfolio_value - self.cash

    @property
    def market_exposure_pct(self) -> float:
        """Share of the portfolio held in positions, in percent."""
        if not self.portfolio_value:
            return 0.0
        return self.invested_amount / self.portfolio_value * 100


@dataclass
class BrokeragePosition:
    """An open position as reported by the brokerage."""

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

    @property
    def pnl_percent(self) -> Optional[float]:
        """Price change since entry, in percent."""
        if not self.avg_entry_price:
            return None
        return (self.current_price - self.avg_entry_price) / self.avg_entry_price * 100
