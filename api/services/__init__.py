"""Business logic services package."""

from api.services.snapshot_service import (
    Snapshot,
    SnapshotService,
    get_snapshot_service,
)

__all__ = [
    "Snapshot",
    "SnapshotService",
    "get_snapshot_service",
]
