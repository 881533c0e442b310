"""Process-local TTL cache for upstream API responses."""

import threading
import time
from datetime import date, datetime
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from paper_dashboard.core.timezone import parse_date
from paper_dashboard.domain.models import CacheClass, CacheEntry
from paper_dashboard.domain.views import CacheStatusItem

KEY_SEPARATOR = ":"

# Logical sources. Keys for BARS_SOURCE are historical price ranges (long TTL).
ACCOUNT_SOURCE = "account"
POSITIONS_SOURCE = "positions"
ORDERS_SOURCE = "orders"
PORTFOLIO_HISTORY_SOURCE = "portfolio-history"
BARS_SOURCE = "bars"
REASONING_SOURCE = "reasoning"

LONG_TTL_SOURCES = frozenset({BARS_SOURCE})

KeyParam = Union[str, int, float, date, datetime]


def _canonical_param(param: KeyParam) -> str:
    if isinstance(param, (date, datetime)):
        return parse_date(param).isoformat()
    if isinstance(param, bool):
        return "1" if param else "0"
    if isinstance(param, (int, float)):
        return str(param)
    return quote(str(param).strip().upper(), safe="")


def make_cache_key(source: str, *params: KeyParam) -> str:
    """
    Build the cache key for a logical request.

    Dates and datetimes collapse to their ISO calendar date, so requests for
    the same day range share a key regardless of time of day. String
    parameters are normalized (stripped, upper-cased) and percent-escaped so a
    parameter can never contain the separator.
    """
    parts = [source] + [_canonical_param(p) for p in params]
    return KEY_SEPARATOR.join(parts)


def key_source(key: str) -> str:
    return key.split(KEY_SEPARATOR, 1)[0]


def classify_key(key: str) -> CacheClass:
    """Resolve a key's TTL bucket from the key string alone."""
    if key_source(key) in LONG_TTL_SOURCES:
        return CacheClass.LONG
    return CacheClass.SHORT


class ResponseCache:
    """
    Key -> whole response body, valid while younger than the key's TTL.

    Entries are replaced, never merged, and never deleted: a stale entry is
    simply treated as a miss. One instance lives for the whole process and is
    handed to services that need it.
    """

    def __init__(
        self,
        short_ttl_seconds: float = 60,
        long_ttl_seconds: float = 3600,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._ttls = {
            CacheClass.SHORT: float(short_ttl_seconds),
            CacheClass.LONG: float(long_ttl_seconds),
        }
        self._clock = clock or time.time
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def ttl(self, key: str) -> float:
        """TTL in seconds for the bucket the key belongs to."""
        return self._ttls[classify_key(key)]

    def get(self, key: str) -> tuple[Any, bool]:
        """
        Look up a key.

        Returns (payload, True) for a live entry and (None, False) otherwise.
        A miss is not an error; the caller fetches and calls put().
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or not entry.is_valid(self._clock(), self.ttl(key)):
            return None, False
        return entry.payload, True

    def put(self, key: str, payload: Any) -> None:
        """Store payload under key, replacing any previous entry."""
        entry = CacheEntry(key=key, payload=payload, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def status(self) -> list[CacheStatusItem]:
        """List every stored key with its age and whether it is still valid."""
        now = self._clock()
        with self._lock:
            entries = sorted(self._entries.values(), key=lambda e: e.key)
        items = []
        for entry in entries:
            ttl = self.ttl(entry.key)
            items.append(
                CacheStatusItem(
                    key=entry.key,
                    age_seconds=round(entry.age(now), 3),
                    ttl_seconds=ttl,
                    valid=entry.is_valid(now, ttl),
                )
            )
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
