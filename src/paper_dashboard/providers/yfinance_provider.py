"""yfinance hourly history provider."""

import logging
from datetime import date, timedelta

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.core.timezone import to_utc
from paper_dashboard.domain.models import PriceBar

logger = logging.getLogger(__name__)

SOURCE = "yfinance"


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


class YFinancePriceBarProvider:
    """Hourly closes from Yahoo Finance via yfinance (about 730 days of 1h history)."""

    def get_hourly_bars(self, symbol: str, start: date, end: date) -> list[PriceBar]:
        yf = _get_yf()
        try:
            hist = yf.Ticker(symbol).history(
                start=start,
                end=end + timedelta(days=1),
                interval="1h",
                auto_adjust=False,
            )
        except Exception as exc:
            raise UpstreamError(SOURCE, str(exc)) from exc

        if hist is None or hist.empty or "Close" not in hist.columns:
            return []

        bars = []
        for idx, close in hist["Close"].items():
            if close is None or close != close:
                continue
            ts = idx.to_pydatetime() if hasattr(idx, "to_pydatetime") else idx
            bars.append(PriceBar(timestamp=to_utc(ts), close=float(close)))
        bars.sort(key=lambda b: b.timestamp)
        return bars
