"""Dashboard snapshot export."""

from paper_dashboard.export.snapshot import (
    SNAPSHOT_FILENAME,
    DashboardSnapshot,
    SnapshotExporter,
)

__all__ = [
    "SNAPSHOT_FILENAME",
    "DashboardSnapshot",
    "SnapshotExporter",
]
