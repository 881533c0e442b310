"""Brokerage provider protocol."""

from typing import Any, Protocol


class BrokerageProvider(Protocol):
    """
    Read access to a brokerage account.

    Methods return the decoded JSON body unchanged; parsing happens in the
    service layer so the raw body is what gets cached. Any failure (network,
    timeout, non-2xx status, undecodable body, missing credentials) raises
    UpstreamError.
    """

    def get_account(self) -> Any:
        """Account balances (/v2/account)."""
        ...

    def get_positions(self) -> Any:
        """Open positions (/v2/positions)."""
        ...

    def get_orders(self, limit: int = 50) -> Any:
        """Most recent orders of any status, newest first (/v2/orders)."""
        ...

    def get_portfolio_history(self, period: str = "1W", timeframe: str = "1H") -> Any:
        """Equity series as parallel `equity` and `timestamp` (epoch seconds) arrays."""
        ...
