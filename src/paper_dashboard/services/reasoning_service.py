"""Cache-through access to the trade-reasoning feed."""

import csv
import io
import logging
from typing import Optional

from paper_dashboard.core.exceptions import UpstreamError
from paper_dashboard.core.timezone import parse_day_first
from paper_dashboard.domain.models import ReasoningEntry
from paper_dashboard.providers.reasoning_provider import ReasoningProvider
from paper_dashboard.services.response_cache import REASONING_SOURCE, ResponseCache, make_cache_key

logger = logging.getLogger(__name__)


def parse_reasoning_csv(text: str) -> list[ReasoningEntry]:
    """
    Parse Timestamp,Ticker,Reasoning rows. The first row is a header.

    Quoted fields may contain commas; unquoted extra columns are joined back
    into the reasoning. Blank rows are ignored and rows missing a field or
    with an unreadable timestamp are logged and skipped.
    """
    entries = []
    reader = csv.reader(io.StringIO(text, newline=""))
    for line_no, row in enumerate(reader, start=1):
        if line_no == 1:
            continue
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < 3:
            logger.warning("Skipping reasoning row %d: expected 3 columns, got %d", line_no, len(row))
            continue

        raw_timestamp = row[0].strip()
        ticker = row[1].strip().upper()
        reasoning = ",".join(row[2:]).strip()
        if not raw_timestamp or not ticker or not reasoning:
            logger.warning("Skipping reasoning row %d: missing field", line_no)
            continue
        try:
            timestamp = parse_day_first(raw_timestamp)
        except ValueError:
            logger.warning("Skipping reasoning row %d: bad timestamp %r", line_no, raw_timestamp)
            continue
        entries.append(ReasoningEntry(timestamp=timestamp, ticker=ticker, reasoning=reasoning))
    return entries


class ReasoningService:
    """
    Trade-reasoning notes served from the short-TTL cache when fresh.

    The CSV text is cached as received. A failed download returns None and
    is not cached.
    """

    def __init__(self, provider: ReasoningProvider, cache: ResponseCache):
        self._provider = provider
        self._cache = cache

    def get_entries(self) -> Optional[list[ReasoningEntry]]:
        key = make_cache_key(REASONING_SOURCE)
        text, hit = self._cache.get(key)
        if not hit:
            try:
                text = self._provider.get_reasoning_csv()
            except UpstreamError as exc:
                logger.warning("No data for %s: %s", key, exc.message)
                return None
            self._cache.put(key, text)
        return parse_reasoning_csv(text)
