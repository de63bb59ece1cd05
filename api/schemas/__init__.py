"""Pydantic schemas package."""

from api.schemas.responses import ErrorDetail, ErrorResponse, SuccessResponse
from api.schemas.scores import (
    AppScoreRead,
    CategoryScoreRead,
    LeaderboardRead,
    QueryScoreRead,
    SnapshotIn,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
    "SnapshotIn",
    "LeaderboardRead",
    "AppScoreRead",
    "CategoryScoreRead",
    "QueryScoreRead",
]
