"""Time helpers. All internal timestamps are timezone-aware UTC datetimes."""

from datetime import date, datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc

TimestampInput = Union[str, int, float, datetime]


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC; naive datetimes are taken to be UTC already."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_timestamp(value: TimestampInput) -> datetime:
    """
    Normalize an upstream timestamp to a UTC datetime.

    Accepts ISO-8601 strings (Alpaca orders, Twelve Data bars) and Unix epoch
    seconds (Alpaca portfolio history). Raises ValueError for anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Invalid epoch timestamp: {value!r}") from exc
    if isinstance(value, str) and value.strip():
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            try:
                dt = date_parser.parse(value.strip())
            except OverflowError as exc:
                raise ValueError(f"Invalid timestamp: {value!r}") from exc
        return to_utc(dt)
    raise ValueError(f"Invalid timestamp: {value!r}")


def parse_date(value: Union[str, date, datetime]) -> date:
    """Parse an ISO date or datetime into a calendar date (time of day dropped)."""
    if isinstance(value, datetime):
        return to_utc(value).date()
    if isinstance(value, date):
        return value
    return parse_timestamp(value).date()


def parse_day_first(value: str) -> datetime:
    """
    Parse a spreadsheet timestamp. ISO-8601 is tried first; anything else is
    read day first, so "05/03/2024 14:30" and "05-03-2024 14:30:15" are both
    5 March. Naive results are taken as UTC.
    """
    text = value.strip()
    if not text:
        raise ValueError(f"Invalid timestamp: {value!r}")
    try:
        dt = date_parser.isoparse(text)
    except (ValueError, OverflowError):
        try:
            dt = date_parser.parse(text, dayfirst=True)
        except OverflowError as exc:
            raise ValueError(f"Invalid timestamp: {value!r}") from exc
    return to_utc(dt)


def floor_to_hour(dt: datetime) -> datetime:
    """Truncate a datetime to the top of its clock hour."""
    return dt.replace(minute=0, second=0, microsecond=0)


def is_top_of_hour(dt: datetime) -> bool:
    return dt.minute == 0 and dt.second == 0 and dt.microsecond == 0


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start) / timedelta(hours=1)
