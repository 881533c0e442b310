"""Alpaca paper-trading REST provider."""

from typing import Any, Optional

import requests

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.providers.http import get_json

SOURCE = "alpaca"
DEFAULT_BASE_URL = "https://paper-api.alpaca.markets"


class AlpacaBrokerageProvider:
    """Reads account, positions, orders and portfolio history from Alpaca."""

    def __init__(
        self,
        api_key: Optional[str],
        secret_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._secret_key = secret_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def _request(self, path: str, params: Optional[dict] = None) -> Any:
        if not self._api_key or not self._secret_key:
            raise UpstreamError(SOURCE, "API credentials not configured")
        headers = {
            "APCA-API-KEY-ID": self._api_key,
            "APCA-API-SECRET-KEY": self._secret_key,
        }
        return get_json(
            self._session,
            SOURCE,
            f"{self._base_url}{path}",
            timeout=self._timeout,
            headers=headers,
            params=params,
        )

    def get_account(self) -> Any:
        return self._request("/v2/account")

    def get_positions(self) -> Any:
        return self._request("/v2/positions")

    def get_orders(self, limit: int = 50) -> Any:
        return self._request(
            "/v2/orders",
            params={"status": "all", "limit": limit, "direction": "desc"},
        )

    def get_portfolio_history(self, period: str = "1W", timeframe: str = "1H") -> Any:
        return self._request(
            "/v2/account/portfolio/history",
            params={"period": period, "timeframe": timeframe},
        )
