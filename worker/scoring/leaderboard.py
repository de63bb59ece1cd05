"""Leaderboard ranking across apps.

Aggregates every app against the same golden sets, sorts by total score
and assigns competition ranks (tied apps share a rank and the next
distinct score skips ahead, e.g. 1, 1, 3).
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

import structlog

from worker.scoring.aggregate import (
    CategoryScore,
    GoldenSet,
    QueryMeta,
    ResultSet,
    aggregate_app,
    defined_golden_sets,
    max_possible_score,
    round_percentage,
)
from worker.scoring.query import QueryScoreDetail

logger = structlog.get_logger(__name__)

TOTAL_QUERIES = 50


class ScoreBand(str, Enum):
    """
    Coarse display bands for a percentage.

    Thresholds are fixed:
    - EXCELLENT: >= 80
    - GOOD: >= 60
    - FAIR: >= 40
    - WEAK: >= 20
    - POOR: < 20
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    WEAK = "weak"
    POOR = "poor"


def score_band(percentage: float) -> ScoreBand:
    """Band for a percentage."""
    if percentage >= 80:
        return ScoreBand.EXCELLENT
    elif percentage >= 60:
        return ScoreBand.GOOD
    elif percentage >= 40:
        return ScoreBand.FAIR
    elif percentage >= 20:
        return ScoreBand.WEAK
    else:
        return ScoreBand.POOR


@dataclass(frozen=True)
class App:
    """A third-party app under comparison."""

    id: str
    name: str = ""
    logo: str = ""
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "logo": self.logo, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "App":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            logo=data.get("logo", ""),
            notes=data.get("notes", ""),
        )


@dataclass
class AppScoreReport:
    """Score summary for one app."""

    app_id: str
    app_name: str
    app_logo: str
    total_score: float
    max_score: float
    percentage: float
    queries_scored: int
    queries_with_results: int
    category_scores: dict[str, CategoryScore] = field(default_factory=dict)
    query_scores: list[QueryScoreDetail] = field(default_factory=list)
    rank: int | None = None  # Leaderboard context only

    @property
    def band(self) -> ScoreBand:
        return score_band(self.percentage)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "app_id": self.app_id,
            "app_name": self.app_name,
            "app_logo": self.app_logo,
            "total_score": self.total_score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "queries_scored": self.queries_scored,
            "queries_with_results": self.queries_with_results,
            "category_scores": {k: v.to_dict() for k, v in self.category_scores.items()},
            "query_scores": [q.to_dict() for q in self.query_scores],
        }
        if self.rank is not None:
            data["rank"] = self.rank
        return data


@dataclass
class Leaderboard:
    """All apps, best first, with competition ranks."""

    max_possible_score: float
    golden_coverage: int
    total_queries: int = TOTAL_QUERIES
    apps: list[AppScoreReport] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_possible_score": self.max_possible_score,
            "golden_coverage": self.golden_coverage,
            "total_queries": self.total_queries,
            "apps": [a.to_dict() for a in self.apps],
        }


def assign_competition_ranks(reports: Sequence[AppScoreReport]) -> list[AppScoreReport]:
    """
    Sort reports by total score (highest first) and return ranked copies.

    The sort is stable, so tied apps keep their input order. A tied app
    inherits the rank of the app above it; the next lower score takes its
    1-based position, giving 1, 1, 3 rather than 1, 1, 2. The reports
    passed in are left unchanged.
    """
    ordered = sorted(reports, key=lambda r: r.total_score, reverse=True)

    ranked: list[AppScoreReport] = []
    for i, report in enumerate(ordered):
        if ranked and report.total_score >= ranked[-1].total_score:
            rank = ranked[-1].rank
        else:
            rank = i + 1
        ranked.append(replace(report, rank=rank))

    return ranked


def _build_report(
    app: App,
    result_sets: Sequence[ResultSet],
    golden: list[GoldenSet],
    query_meta_by_index: Mapping[int, QueryMeta] | None,
    max_score: float,
) -> AppScoreReport:
    aggregate = aggregate_app(result_sets, golden, query_meta_by_index)
    return AppScoreReport(
        app_id=app.id,
        app_name=app.name,
        app_logo=app.logo,
        total_score=aggregate.total_score,
        max_score=max_score,
        percentage=round_percentage(aggregate.total_score, max_score),
        queries_scored=len(golden),
        queries_with_results=aggregate.queries_with_results,
        category_scores=aggregate.category_scores,
        query_scores=aggregate.query_scores,
    )


def score_app(
    app: App,
    result_sets: Sequence[ResultSet] | None,
    golden_sets: Sequence[GoldenSet] | None,
    query_meta_by_index: Mapping[int, QueryMeta] | None,
) -> AppScoreReport:
    """
    Score a single app outside leaderboard context.

    Result sets belonging to other apps are ignored. The returned report
    has no rank; ranks only exist relative to other apps.
    """
    golden = defined_golden_sets(golden_sets)
    own_results = [r for r in result_sets or () if r.app_id == app.id]
    max_score = max_possible_score(golden)
    return _build_report(app, own_results, golden, query_meta_by_index, max_score)


def rank_leaderboard(
    apps: Sequence[App] | None,
    all_result_sets: Sequence[ResultSet] | None,
    golden_sets: Sequence[GoldenSet] | None,
    query_meta_by_index: Mapping[int, QueryMeta] | None,
) -> Leaderboard:
    """
    Score every app and rank them against each other.

    Args:
        apps: Apps to rank, in their preferred tie order
        all_result_sets: Result sets for any of the apps
        golden_sets: Raw golden sets; empty placeholders are dropped here
        query_meta_by_index: Query index -> metadata for category buckets

    Returns:
        Leaderboard with reports sorted by total score and ranked
    """
    apps = apps or ()
    golden = defined_golden_sets(golden_sets)
    max_score = max_possible_score(golden)

    results_by_app: dict[str, list[ResultSet]] = defaultdict(list)
    for result in all_result_sets or ():
        results_by_app[result.app_id].append(result)

    reports = [
        _build_report(app, results_by_app.get(app.id, []), golden, query_meta_by_index, max_score)
        for app in apps
    ]
    ranked = assign_competition_ranks(reports)

    logger.info(
        "leaderboard_ranked",
        apps=len(ranked),
        golden_coverage=len(golden),
        max_possible_score=max_score,
    )

    return Leaderboard(
        max_possible_score=max_score,
        golden_coverage=len(golden),
        total_queries=TOTAL_QUERIES,
        apps=ranked,
    )
