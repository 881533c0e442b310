"""Response cache entry."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached upstream response body.

    Replaced as a whole on every refresh; never merged or mutated.
    """

    key: str
    payload: Any
    stored_at: float  # wall-clock epoch seconds

    def age(self, now: float) -> float:
        return now - self.stored_at

    def is_valid(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) < ttl_seconds
