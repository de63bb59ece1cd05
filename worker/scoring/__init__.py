"""Golden-set scoring and leaderboard ranking for book search apps.

Pure functions over three input collections:
- golden sets (curated ground-truth book lists per query)
- result sets (book lists each app returned per query)
- query metadata (category per query index)
"""

from worker.scoring.aggregate import (
    AppAggregate,
    CategoryScore,
    GoldenSet,
    QueryMeta,
    ResultSet,
    ResultStatus,
    aggregate_app,
    defined_golden_sets,
    max_possible_score,
    result_status,
    round_percentage,
)
from worker.scoring.leaderboard import (
    TOTAL_QUERIES,
    App,
    AppScoreReport,
    Leaderboard,
    ScoreBand,
    assign_competition_ranks,
    rank_leaderboard,
    score_app,
    score_band,
)
from worker.scoring.normalize import normalize, same_work
from worker.scoring.query import (
    Book,
    QueryScoreDetail,
    count_golden_matches,
    is_golden_match,
    score_query,
)

__all__ = [
    "Book",
    "GoldenSet",
    "ResultSet",
    "QueryMeta",
    "App",
    "QueryScoreDetail",
    "CategoryScore",
    "AppAggregate",
    "AppScoreReport",
    "Leaderboard",
    "ResultStatus",
    "ScoreBand",
    "TOTAL_QUERIES",
    "normalize",
    "same_work",
    "score_query",
    "is_golden_match",
    "count_golden_matches",
    "aggregate_app",
    "defined_golden_sets",
    "max_possible_score",
    "result_status",
    "round_percentage",
    "score_app",
    "score_band",
    "assign_competition_ranks",
    "rank_leaderboard",
]
