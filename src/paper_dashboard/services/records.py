"""
Parsing of upstream JSON bodies into domain records.

Brokerage numbers arrive as strings and timestamps as ISO strings or epoch
seconds. A record that fails to parse is logged and skipped; the rest of the
batch is still returned.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from paper_dashboard.core.timezone import parse_timestamp
from paper_dashboard.domain.models import (
    AccountBalance,
    BrokeragePosition,
    Fill,
    OrderSide,
    PriceBar,
)

logger = logging.getLogger(__name__)


def parse_float(value: Any) -> float:
    """Parse a numeric field; raises ValueError for missing or non-numeric values."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if result != result or result in (float("inf"), float("-inf")):
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def parse_optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return parse_float(value)


def parse_decimal(value: Any) -> Decimal:
    """Parse a quantity or price field exactly; raises ValueError on bad input."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def parse_optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return parse_decimal(value)


def _require_symbol(record: dict) -> str:
    symbol = (record.get("symbol") or "").strip().upper()
    if not symbol:
        raise ValueError("Missing symbol")
    return symbol


def parse_account(body: Any) -> Optional[AccountBalance]:
    """Parse /v2/account. Returns None when the body is unusable."""
    if not isinstance(body, dict):
        logger.warning("Account body is not an object: %r", type(body).__name__)
        return None
    try:
        return AccountBalance(
            portfolio_value=parse_float(body.get("portfolio_value")),
            cash=parse_float(body.get("cash")),
            buying_power=parse_float(body.get("buying_power")),
            equity=parse_float(body.get("equity")),
            last_equity=parse_optional_float(body.get("last_equity")),
            account_number=body.get("account_number"),
            status=body.get("status"),
        )
    except ValueError as exc:
        logger.warning("Skipping malformed account record: %s", exc)
        return None


def parse_position(record: dict) -> BrokeragePosition:
    return BrokeragePosition(
        symbol=_require_symbol(record),
        qty=parse_float(record.get("qty")),
        side=str(record.get("side") or "long"),
        market_value=parse_float(record.get("market_value")),
        cost_basis=parse_float(record.get("cost_basis")),
        avg_entry_price=parse_float(record.get("avg_entry_price")),
        unrealized_pl=parse_float(record.get("unrealized_pl")),
        unrealized_plpc=parse_float(record.get("unrealized_plpc")),
        current_price=parse_float(record.get("current_price")),
        asset_id=record.get("asset_id"),
    )


def parse_positions(body: Any) -> list[BrokeragePosition]:
    """Parse /v2/positions, skipping malformed entries."""
    if not isinstance(body, list):
        logger.warning("Positions body is not a list: %r", type(body).__name__)
        return []
    positions = []
    for record in body:
        try:
            if not isinstance(record, dict):
                raise ValueError("Position record is not an object")
            positions.append(parse_position(record))
        except ValueError as exc:
            logger.warning("Skipping malformed position record: %s", exc)
    return positions


def parse_order(record: dict) -> Fill:
    """
    Convert an Alpaca order into a Fill.

    Quantity is the filled quantity when anything filled, otherwise the
    ordered quantity. Price is the average fill price, None while unfilled.
    The timestamp is the fill time when present, else the submit time.
    """
    side = str(record.get("side") or "").strip().upper()
    if side not in OrderSide.__members__:
        raise ValueError(f"Unknown order side: {record.get('side')!r}")

    filled_qty = parse_optional_decimal(record.get("filled_qty"))
    quantity = filled_qty if filled_qty else parse_decimal(record.get("qty"))
    if quantity < 0:
        raise ValueError(f"Negative quantity: {quantity}")

    raw_time = record.get("filled_at") or record.get("submitted_at")
    return Fill(
        symbol=_require_symbol(record),
        side=OrderSide(side),
        quantity=quantity,
        price=parse_optional_decimal(record.get("filled_avg_price")),
        timestamp=parse_timestamp(raw_time),
        order_id=record.get("id"),
        order_type=record.get("type") or record.get("order_type"),
        status=record.get("status"),
    )


def parse_orders(body: Any) -> list[Fill]:
    """Parse /v2/orders, skipping malformed entries. Order is preserved."""
    if not isinstance(body, list):
        logger.warning("Orders body is not a list: %r", type(body).__name__)
        return []
    fills = []
    for record in body:
        try:
            if not isinstance(record, dict):
                raise ValueError("Order record is not an object")
            fills.append(parse_order(record))
        except ValueError as exc:
            logger.warning("Skipping malformed order record %r: %s", _record_id(record), exc)
    return fills


def parse_bars(body: Any) -> list[PriceBar]:
    """
    Parse a cached bar list ({"t": ..., "c": ...} items), ascending by time.
    """
    if not isinstance(body, list):
        return []
    bars = []
    for record in body:
        try:
            if not isinstance(record, dict):
                raise ValueError("Bar record is not an object")
            bars.append(PriceBar(timestamp=parse_timestamp(record.get("t")), close=parse_float(record.get("c"))))
        except ValueError as exc:
            logger.warning("Skipping malformed bar: %s", exc)
    bars.sort(key=lambda b: b.timestamp)
    return bars


def bars_to_body(bars: list[PriceBar]) -> list[dict]:
    """Serialize bars to the cached/wire shape."""
    return [{"t": bar.timestamp.isoformat(), "c": bar.close} for bar in bars]


def _record_id(record: Any) -> Optional[str]:
    return record.get("id") if isinstance(record, dict) else None
