"""Repository protocols (interfaces)."""

from paper_dashboard.repositories.protocols.sync_repo import SyncRepository

__all__ = [
    "SyncRepository",
]
