"""Twelve Data hourly time-series provider."""

import logging
from datetime import date
from typing import Optional

import requests

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.core.timezone import parse_timestamp
from paper_dashboard.domain.models import PriceBar
from paper_dashboard.providers.http import get_json

logger = logging.getLogger(__name__)

SOURCE = "twelvedata"
DEFAULT_BASE_URL = "https://api.twelvedata.com"

# Error codes Twelve Data uses for "nothing in that range / unknown symbol"
_NO_DATA_CODES = {400, 404}


class TwelveDataPriceBarProvider:
    """Hourly closes from the Twelve Data time_series endpoint, in UTC."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def get_hourly_bars(self, symbol: str, start: date, end: date) -> list[PriceBar]:
        if not self._api_key:
            raise UpstreamError(SOURCE, "API key not configured")

        body = get_json(
            self._session,
            SOURCE,
            f"{self._base_url}/time_series",
            timeout=self._timeout,
            params={
                "symbol": symbol,
                "interval": "1h",
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "timezone": "UTC",
                "format": "JSON",
                "apikey": self._api_key,
            },
        )

        if not isinstance(body, dict):
            raise UpstreamError(SOURCE, "unexpected response shape")

        if body.get("status") == "error":
            code = body.get("code")
            if code in _NO_DATA_CODES:
                logger.info("Twelve Data has no bars for %s %s..%s: %s", symbol, start, end, body.get("message"))
                return []
            raise UpstreamError(SOURCE, str(body.get("message") or "error status"), status_code=code)

        values = body.get("values")
        if not isinstance(values, list):
            return []

        bars = []
        for value in values:
            try:
                bars.append(
                    PriceBar(
                        timestamp=parse_timestamp(value["datetime"]),
                        close=float(value["close"]),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed Twelve Data bar for %s: %r", symbol, value)

        # Twelve Data returns newest first
        bars.sort(key=lambda b: b.timestamp)
        return bars
