"""Enumerations for domain models."""

from enum import Enum


class OrderSide(str, Enum):
    """Direction of an order fill."""

    BUY = "BUY"
    SELL = "SELL"


class CacheClass(str, Enum):
    """TTL bucket a cache key belongs to."""

    SHORT = "SHORT"  # account, positions, orders, portfolio history, reasoning sheet
    LONG = "LONG"  # historical price bars
