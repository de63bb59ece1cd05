"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from api.services.snapshot_service import SnapshotService, get_snapshot_service

__all__ = ["SnapshotServiceDep"]


# Snapshot-backed scoring service
SnapshotServiceDep = Annotated[SnapshotService, Depends(get_snapshot_service)]
