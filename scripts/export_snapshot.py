#!/usr/bin/env python3
"""
Write the dashboard snapshot (account, positions, history, orders, benchmark)
to a JSON file.
Usage: from project root:
  ./venv/bin/python scripts/export_snapshot.py [output_path]
Defaults to <data_dir>/exports/snapshot.json. Set USE_STUB_PROVIDERS=true to
export the offline stub data.
"""
import sys
from pathlib import Path

from paper_dashboard.config.logging_config import setup_logging
from paper_dashboard.config.settings import get_settings
from paper_dashboard.export import SNAPSHOT_FILENAME, SnapshotExporter
from paper_dashboard.providers import build_brokerage_provider, build_price_bar_provider
from paper_dashboard.services import (
    BrokerageService,
    DashboardService,
    PriceHistoryService,
    ResponseCache,
)


def main(argv: list[str]) -> int:
    setup_logging()
    settings = get_settings()

    output = Path(argv[1]) if len(argv) > 1 else settings.get_export_dir() / SNAPSHOT_FILENAME

    cache = ResponseCache(
        short_ttl_seconds=settings.short_cache_ttl_seconds,
        long_ttl_seconds=settings.long_cache_ttl_seconds,
    )
    dashboard = DashboardService(
        brokerage=BrokerageService(
            provider=build_brokerage_provider(settings),
            cache=cache,
            orders_limit=settings.orders_limit,
            history_period=settings.history_period,
            history_timeframe=settings.history_timeframe,
            history_min_equity=settings.history_min_equity,
        ),
        prices=PriceHistoryService(
            provider=build_price_bar_provider(settings),
            cache=cache,
            benchmark_symbol=settings.benchmark_symbol,
        ),
        starting_capital=settings.starting_capital,
        benchmark_max_gap_hours=settings.benchmark_max_gap_hours,
    )

    snapshot = SnapshotExporter(dashboard).export_json(str(output))
    if snapshot.account is None:
        print("Warning: account data was unavailable; snapshot is partial", file=sys.stderr)
    print(f"Snapshot written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
