"""Historical price bars with long-lived caching and synthetic fallback."""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from paper_dashboard.core.exceptions import UpstreamError, ValidationError
from paper_dashboard.core.timezone import parse_date
from paper_dashboard.domain.models import Fill, PriceBar
from paper_dashboard.domain.views import PricePoint, PriceSeries
from paper_dashboard.providers.price_bar_provider import PriceBarProvider
from paper_dashboard.services.records import bars_to_body, parse_bars
from paper_dashboard.services.response_cache import BARS_SOURCE, ResponseCache, make_cache_key
from paper_dashboard.services.synthetic_prices import synthetic_series_from_fills

logger = logging.getLogger(__name__)

DateInput = Union[str, date, datetime]


class PriceHistoryService:
    """Hourly bars per symbol, cached under the long TTL."""

    def __init__(
        self,
        provider: PriceBarProvider,
        cache: ResponseCache,
        benchmark_symbol: str = "SPY",
    ):
        self._provider = provider
        self._cache = cache
        self._benchmark_symbol = benchmark_symbol.upper()

    @property
    def benchmark_symbol(self) -> str:
        return self._benchmark_symbol

    def get_bars(self, symbol: str, start: DateInput, end: DateInput) -> Optional[list[PriceBar]]:
        """
        Bars for symbol between two calendar dates (inclusive).

        Returns [] when the provider has no data and None when it could not
        be reached.
        """
        symbol = symbol.strip().upper()
        start_date, end_date = parse_date(start), parse_date(end)
        if start_date > end_date:
            raise ValidationError(f"start {start_date} is after end {end_date}")

        key = make_cache_key(BARS_SOURCE, symbol, start_date, end_date)
        payload, hit = self._cache.get(key)
        if hit:
            return parse_bars(payload)

        try:
            bars = self._provider.get_hourly_bars(symbol, start_date, end_date)
        except UpstreamError as exc:
            logger.warning("No bars for %s (%s..%s): %s", symbol, start_date, end_date, exc.message)
            return None

        if not bars:
            logger.info("Price-bar provider has no data for %s (%s..%s)", symbol, start_date, end_date)
        self._cache.put(key, bars_to_body(bars))
        return list(bars)

    def get_price_series(
        self,
        symbol: str,
        start: DateInput,
        end: DateInput,
        fills: Optional[Iterable[Fill]] = None,
        now: Optional[datetime] = None,
    ) -> Optional[PriceSeries]:
        """
        Market price series for symbol, or a synthetic one built from its
        fills when the provider has no data. None when nothing is available.
        """
        symbol = symbol.strip().upper()
        bars = self.get_bars(symbol, start, end)
        if bars is None:
            return None
        if bars:
            return PriceSeries(
                symbol=symbol,
                points=[PricePoint(timestamp=b.timestamp, price=b.close) for b in bars],
            )
        if fills is not None:
            return synthetic_series_from_fills(symbol, fills, now=now)
        return None

    def get_benchmark_bars(self, start: DateInput, end: DateInput) -> Optional[list[PriceBar]]:
        return self.get_bars(self._benchmark_symbol, start, end)
