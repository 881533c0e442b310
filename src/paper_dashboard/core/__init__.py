"""Core utilities and shared functionality."""

from paper_dashboard.core.timezone import (
    UTC,
    now_utc,
    to_utc,
    parse_timestamp,
    parse_date,
    floor_to_hour,
)
from paper_dashboard.core.exceptions import (
    AppError,
    ValidationError,
    UpstreamError,
)

__all__ = [
    "UTC",
    "now_utc",
    "to_utc",
    "parse_timestamp",
    "parse_date",
    "floor_to_hour",
    "AppError",
    "ValidationError",
    "UpstreamError",
]
