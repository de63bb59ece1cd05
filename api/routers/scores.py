"""Score endpoints: leaderboard and per-app breakdown."""

from fastapi import APIRouter

from api.deps import SnapshotServiceDep
from api.schemas.responses import ErrorResponse, SuccessResponse
from api.schemas.scores import AppScoreRead, LeaderboardRead

router = APIRouter(prefix="/scores", tags=["scores"])


@router.get(
    "",
    response_model=SuccessResponse[LeaderboardRead],
    summary="Ranked leaderboard of all apps",
)
async def get_leaderboard(service: SnapshotServiceDep) -> SuccessResponse[LeaderboardRead]:
    """
    Score every app against the defined golden sets and rank them.

    - Apps are ordered by total score, highest first
    - Tied apps share a rank (1, 1, 3)
    - Queries without a golden set are excluded from scoring
    """
    leaderboard = service.leaderboard()
    return SuccessResponse(data=LeaderboardRead.model_validate(leaderboard.to_dict()))


@router.get(
    "/{app_id}",
    response_model=SuccessResponse[AppScoreRead],
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
    summary="Score breakdown for one app",
)
async def get_app_scores(app_id: str, service: SnapshotServiceDep) -> SuccessResponse[AppScoreRead]:
    """
    Per-query and per-category breakdown for one app.

    Rank is not included; use the leaderboard for ranks.
    """
    report = service.app_report(app_id)
    return SuccessResponse(data=AppScoreRead.model_validate(report.to_dict()))
