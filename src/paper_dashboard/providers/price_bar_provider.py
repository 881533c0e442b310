"""Historical price-bar provider protocol."""

from datetime import date
from typing import Protocol

from paper_dashboard.domain.models import PriceBar


class PriceBarProvider(Protocol):
    """
    Hourly closing prices for a symbol over a date range.

    An empty list means the provider has no data for the range or symbol;
    that is a normal outcome, not an error. Transport or API failures raise
    UpstreamError.
    """

    def get_hourly_bars(self, symbol: str, start: date, end: date) -> list[PriceBar]:
        """Return bars ascending by timestamp, inclusive of both dates."""
        ...
