"""Cache-through access to brokerage data."""

import logging
from typing import Any, Callable, Optional

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.domain.models import (
    AccountBalance,
    BrokeragePosition,
    Fill,
    ValuationCheckpoint,
)
from paper_dashboard.providers.brokerage_provider import BrokerageProvider
from paper_dashboard.services.position_history import build_checkpoints
from paper_dashboard.services.records import parse_account, parse_orders, parse_positions
from paper_dashboard.services.response_cache import (
    ACCOUNT_SOURCE,
    ORDERS_SOURCE,
    PORTFOLIO_HISTORY_SOURCE,
    POSITIONS_SOURCE,
    ResponseCache,
    make_cache_key,
)

logger = logging.getLogger(__name__)


class BrokerageService:
    """
    Brokerage reads served from the response cache when fresh.

    On a miss the provider is called and the raw body is cached. A failed
    fetch returns None ("no data") and is not cached; an expired entry is
    never served in its place.
    """

    def __init__(
        self,
        provider: BrokerageProvider,
        cache: ResponseCache,
        orders_limit: int = 50,
        history_period: str = "1W",
        history_timeframe: str = "1H",
        history_min_equity: float = 0.0,
    ):
        self._provider = provider
        self._cache = cache
        self._orders_limit = orders_limit
        self._history_period = history_period
        self._history_timeframe = history_timeframe
        self._history_min_equity = history_min_equity

    def _cached(self, key: str, fetch: Callable[[], Any]) -> Optional[Any]:
        payload, hit = self._cache.get(key)
        if hit:
            return payload
        try:
            payload = fetch()
        except UpstreamError as exc:
            logger.warning("No data for %s: %s", key, exc.message)
            return None
        self._cache.put(key, payload)
        return payload

    def get_account(self) -> Optional[AccountBalance]:
        body = self._cached(make_cache_key(ACCOUNT_SOURCE), self._provider.get_account)
        if body is None:
            return None
        return parse_account(body)

    def get_positions(self) -> Optional[list[BrokeragePosition]]:
        body = self._cached(make_cache_key(POSITIONS_SOURCE), self._provider.get_positions)
        if body is None:
            return None
        return parse_positions(body)

    def get_orders(self) -> Optional[list[Fill]]:
        """All recent orders, newest first, including unfilled ones."""
        limit = self._orders_limit
        body = self._cached(
            make_cache_key(ORDERS_SOURCE, limit),
            lambda: self._provider.get_orders(limit=limit),
        )
        if body is None:
            return None
        return parse_orders(body)

    def get_fills(self) -> Optional[list[Fill]]:
        """Executed fills only (orders with a fill price)."""
        orders = self.get_orders()
        if orders is None:
            return None
        return [order for order in orders if order.is_executed]

    def get_checkpoints(self) -> Optional[list[ValuationCheckpoint]]:
        """Hourly valuation checkpoints, ascending."""
        period, timeframe = self._history_period, self._history_timeframe
        body = self._cached(
            make_cache_key(PORTFOLIO_HISTORY_SOURCE, period, timeframe),
            lambda: self._provider.get_portfolio_history(period=period, timeframe=timeframe),
        )
        if body is None:
            return None
        if not isinstance(body, dict):
            logger.warning("Portfolio history body is not an object")
            return None
        return build_checkpoints(
            body.get("equity") or [],
            body.get("timestamp") or [],
            min_value=self._history_min_equity,
        )
