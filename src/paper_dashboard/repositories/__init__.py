"""Repository layer - data access abstractions and implementations."""

from paper_dashboard.repositories.protocols import SyncRepository

__all__ = [
    "SyncRepository",
]
