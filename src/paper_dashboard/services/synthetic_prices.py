"""
Synthetic fallback price series.

Used only when the price-bar provider has nothing for a symbol, so a chart
still has a continuous line between the buy and the sell (or now). Every
point is flagged synthetic and must never be shown as market data.
"""

import hashlib
import logging
import math
import random
from datetime import datetime, timedelta
from typing import Iterable, Optional

from paper_dashboard.core.timezone import now_utc
from paper_dashboard.domain.models import Fill, OrderSide
from paper_dashboard.domain.views import PricePoint, PriceSeries

logger = logging.getLogger(__name__)

OPEN_POSITION_MARKUP = 1.05
OSCILLATION_AMPLITUDE = 0.03
OSCILLATION_CYCLES = 4
NOISE_AMPLITUDE = 0.01
STEP = timedelta(hours=1)


def seed_for(symbol: str, buy_time: datetime) -> int:
    """Stable seed from the buy fill; Python's hash() is salted per process."""
    digest = hashlib.sha256(f"{symbol.upper()}|{buy_time.isoformat()}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def generate_synthetic_series(
    symbol: str,
    buy_time: datetime,
    buy_price: float,
    sell_time: Optional[datetime] = None,
    sell_price: Optional[float] = None,
    now: Optional[datetime] = None,
) -> PriceSeries:
    """
    Hourly series from buy_time to sell_time (or now).

    Interior points follow the straight line from buy price to terminal
    price plus a 4-cycle sine of amplitude 3% of the buy price plus uniform
    noise within 1% of the buy price. The first point is exactly the buy
    price and the last exactly the terminal price; with no sell the terminal
    price is the buy price marked up 5%.
    """
    if sell_time is not None and sell_price is not None:
        end_time, terminal = sell_time, float(sell_price)
    else:
        end_time, terminal = (now or now_utc()), float(buy_price) * OPEN_POSITION_MARKUP

    buy_price = float(buy_price)
    if end_time <= buy_time:
        return PriceSeries(
            symbol=symbol,
            points=[PricePoint(timestamp=buy_time, price=terminal, synthetic=True)],
            synthetic=True,
        )

    rng = random.Random(seed_for(symbol, buy_time))
    span = (end_time - buy_time).total_seconds()
    oscillation = OSCILLATION_AMPLITUDE * buy_price
    noise = NOISE_AMPLITUDE * buy_price

    points = [PricePoint(timestamp=buy_time, price=buy_price, synthetic=True)]
    t = buy_time + STEP
    while t < end_time:
        fraction = (t - buy_time).total_seconds() / span
        trend = buy_price + (terminal - buy_price) * fraction
        wave = oscillation * math.sin(2 * math.pi * OSCILLATION_CYCLES * fraction)
        jitter = rng.uniform(-noise, noise)
        points.append(PricePoint(timestamp=t, price=trend + wave + jitter, synthetic=True))
        t += STEP
    points.append(PricePoint(timestamp=end_time, price=terminal, synthetic=True))

    return PriceSeries(symbol=symbol, points=points, synthetic=True)


def synthetic_series_from_fills(
    symbol: str,
    fills: Iterable[Fill],
    now: Optional[datetime] = None,
) -> Optional[PriceSeries]:
    """
    Build the fallback series from a symbol's first priced BUY and the first
    priced SELL after it. Returns None when the symbol was never bought.
    """
    symbol = symbol.upper()
    priced = sorted(
        (f for f in fills if f.symbol.upper() == symbol and f.price is not None),
        key=lambda f: f.timestamp,
    )
    buy = next((f for f in priced if f.side == OrderSide.BUY), None)
    if buy is None:
        return None
    sell = next(
        (f for f in priced if f.side == OrderSide.SELL and f.timestamp > buy.timestamp),
        None,
    )

    logger.info("Generating synthetic price series for %s", symbol)
    return generate_synthetic_series(
        symbol=symbol,
        buy_time=buy.timestamp,
        buy_price=float(buy.price),
        sell_time=sell.timestamp if sell else None,
        sell_price=float(sell.price) if sell else None,
        now=now,
    )
