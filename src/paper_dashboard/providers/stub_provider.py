"""Stub providers with deterministic fake data for offline operation."""

import random
from datetime import date, datetime, timedelta
from typing import Any, Optional

from paper_dashboard.core.timezone import floor_to_hour, now_utc, to_utc
from paper_dashboard.domain.models import PriceBar


# Deterministic reference prices for symbols the stub "covers"
_STUB_PRICES: dict[str, float] = {
    "AAPL": 185.50,
    "MSFT": 378.25,
    "NVDA": 485.25,
    "SPY": 573.45,
}

# (symbol, side, qty, fill price or None, hours before as_of, status)
_STUB_ORDERS: list[tuple[str, str, str, Optional[str], int, str]] = [
    ("AAPL", "buy", "10", "180.00", 120, "filled"),
    ("MSFT", "buy", "5", "370.00", 96, "filled"),
    ("ACME", "buy", "20", "25.00", 72, "filled"),
    ("ACME", "sell", "20", "26.50", 30, "filled"),
    ("NVDA", "buy", "3", None, 6, "canceled"),
]

_STARTING_EQUITY = 100000.0


def _as_of(value: Optional[datetime]) -> datetime:
    return floor_to_hour(to_utc(value) if value else now_utc())


class StubBrokerageProvider:
    """
    Alpaca-shaped bodies for a small fixed account.

    Uses a fixed random seed so equity history is reproducible.
    """

    def __init__(self, as_of: Optional[datetime] = None, seed: int = 42):
        self._as_of = as_of
        self._seed = seed

    def get_account(self) -> Any:
        positions = self.get_positions()
        long_value = sum(float(p["market_value"]) for p in positions)
        cash = _STARTING_EQUITY - sum(float(p["cost_basis"]) for p in positions) + 30.0
        portfolio_value = cash + long_value
        return {
            "account_number": "PA0000STUB",
            "status": "ACTIVE",
            "currency": "USD",
            "cash": f"{cash:.2f}",
            "buying_power": f"{cash * 2:.2f}",
            "portfolio_value": f"{portfolio_value:.2f}",
            "equity": f"{portfolio_value:.2f}",
            "last_equity": f"{portfolio_value - 125.0:.2f}",
        }

    def get_positions(self) -> Any:
        result = []
        for symbol, _side, qty, price, _hours, status in _STUB_ORDERS:
            if symbol not in ("AAPL", "MSFT") or status != "filled":
                continue
            quantity = float(qty)
            entry = float(price)
            current = _STUB_PRICES[symbol]
            market_value = quantity * current
            cost_basis = quantity * entry
            result.append({
                "asset_id": f"stub-{symbol.lower()}",
                "symbol": symbol,
                "qty": qty,
                "side": "long",
                "market_value": f"{market_value:.2f}",
                "cost_basis": f"{cost_basis:.2f}",
                "avg_entry_price": f"{entry:.2f}",
                "unrealized_pl": f"{market_value - cost_basis:.2f}",
                "unrealized_plpc": f"{(current - entry) / entry:.6f}",
                "current_price": f"{current:.2f}",
            })
        return result

    def get_orders(self, limit: int = 50) -> Any:
        as_of = _as_of(self._as_of)
        orders = []
        for i, (symbol, side, qty, price, hours, status) in enumerate(_STUB_ORDERS):
            submitted = as_of - timedelta(hours=hours, minutes=-5)
            orders.append({
                "id": f"stub-order-{i}",
                "symbol": symbol,
                "side": side,
                "qty": qty,
                "filled_qty": qty if price else "0",
                "filled_avg_price": price,
                "type": "market",
                "status": status,
                "submitted_at": submitted.isoformat(),
                "filled_at": submitted.isoformat() if price else None,
            })
        orders.sort(key=lambda o: o["submitted_at"], reverse=True)
        return orders[:limit]

    def get_portfolio_history(self, period: str = "1W", timeframe: str = "1H") -> Any:
        as_of = _as_of(self._as_of)
        rng = random.Random(self._seed)
        equity = []
        timestamps = []
        value = _STARTING_EQUITY
        for hours_back in range(7 * 24, -1, -1):
            ts = as_of - timedelta(hours=hours_back)
            value += rng.uniform(-40.0, 45.0)
            equity.append(round(value, 2))
            timestamps.append(int(ts.timestamp()))
        return {"equity": equity, "timestamp": timestamps, "timeframe": timeframe}


class StubPriceBarProvider:
    """
    Deterministic hourly bars for a few known symbols; no data for the rest,
    which exercises the synthetic fallback.
    """

    def __init__(self, seed: int = 42):
        self._seed = seed

    def get_hourly_bars(self, symbol: str, start: date, end: date) -> list[PriceBar]:
        base = _STUB_PRICES.get(symbol.upper())
        if base is None or start > end:
            return []
        rng = random.Random(f"{self._seed}:{symbol.upper()}")
        first = to_utc(datetime(start.year, start.month, start.day))
        last = to_utc(datetime(end.year, end.month, end.day, 23))
        bars = []
        price = base
        ts = first
        while ts <= last:
            price *= 1 + rng.uniform(-0.003, 0.003)
            bars.append(PriceBar(timestamp=ts, close=round(price, 2)))
            ts += timedelta(hours=1)
        return bars


_STUB_REASONING: dict[str, str] = {
    "AAPL": "Services revenue keeps compounding, buying the pullback",
    "MSFT": "Cloud growth re-accelerating, adding a starter position",
    "ACME": "Momentum breakout on volume, tight stop",
    "NVDA": "Waiting for a better entry, order pulled",
}


class StubReasoningProvider:
    """Reasoning sheet rows for the stub orders, in the sheet's DD/MM/YYYY format."""

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of

    def get_reasoning_csv(self) -> str:
        as_of = _as_of(self._as_of)
        lines = ["Timestamp,Ticker,Reasoning"]
        for symbol, side, _qty, _price, hours, _status in _STUB_ORDERS:
            when = as_of - timedelta(hours=hours, minutes=-5)
            reasoning = f"{side.upper()}: {_STUB_REASONING[symbol]}"
            lines.append(f'{when:%d/%m/%Y %H:%M:%S},{symbol},"{reasoning}"')
        return "\n".join(lines) + "\n"
