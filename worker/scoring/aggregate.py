"""Per-app aggregation of query scores.

Runs the query scorer over every defined golden query for one app and
rolls the results up into a total, per-category buckets and an ordered
per-query report.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from worker.scoring.query import MAX_POINTS_PER_BOOK, Book, QueryScoreDetail, score_query


class ResultStatus(str, Enum):
    """Entry status of an app's result set for one query."""

    COMPLETE = "complete"
    NOT_STARTED = "not-started"


@dataclass(frozen=True)
class GoldenSet:
    """Curated ground-truth books for one query."""

    query_index: int
    books: tuple[Book, ...] = ()

    @property
    def is_defined(self) -> bool:
        """A golden set without books is a placeholder and is never scored."""
        return len(self.books) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "query_index": self.query_index,
            "books": [b.to_dict() for b in self.books],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GoldenSet":
        return cls(
            query_index=data["query_index"],
            books=tuple(Book.from_dict(b) for b in data.get("books") or []),
        )


@dataclass(frozen=True)
class ResultSet:
    """Books an app returned for one query, as recorded by the operator."""

    app_id: str
    query_index: int
    books: tuple[Book, ...] = ()

    @property
    def status(self) -> ResultStatus:
        return result_status(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "app_id": self.app_id,
            "query_index": self.query_index,
            "books": [b.to_dict() for b in self.books],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultSet":
        return cls(
            app_id=str(data["app_id"]),
            query_index=data["query_index"],
            books=tuple(Book.from_dict(b) for b in data.get("books") or []),
        )


@dataclass(frozen=True)
class QueryMeta:
    """Query metadata. Only ``category`` affects scoring."""

    index: int
    category: str
    text: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "category": self.category,
            "text": self.text,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QueryMeta":
        return cls(
            index=data["index"],
            category=data["category"],
            text=data.get("text", ""),
            description=data.get("description", ""),
        )


@dataclass
class CategoryScore:
    """Accumulated score for one query category."""

    total_score: float = 0.0
    max_score: float = 0.0
    queries_scored: int = 0
    percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_score": self.total_score,
            "max_score": self.max_score,
            "queries_scored": self.queries_scored,
            "percentage": self.percentage,
        }


@dataclass
class AppAggregate:
    """Rolled-up scores for one app."""

    total_score: float = 0.0
    query_scores: list[QueryScoreDetail] = field(default_factory=list)
    category_scores: dict[str, CategoryScore] = field(default_factory=dict)
    queries_with_results: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_score": self.total_score,
            "query_scores": [q.to_dict() for q in self.query_scores],
            "category_scores": {k: v.to_dict() for k, v in self.category_scores.items()},
            "queries_with_results": self.queries_with_results,
        }


def round_percentage(score: float, max_score: float) -> float:
    """
    Percentage of ``max_score`` rounded half-up to one decimal place.

    Returns 0.0 when ``max_score`` is not positive. This is the only place
    rounding happens; totals are never rounded.
    """
    if max_score <= 0:
        return 0.0
    return math.floor(score / max_score * 1000 + 0.5) / 10


def result_status(result_set: ResultSet | None) -> ResultStatus:
    """A result set counts as complete once it holds at least one book."""
    if result_set is not None and result_set.books:
        return ResultStatus.COMPLETE
    return ResultStatus.NOT_STARTED


def defined_golden_sets(golden_sets: Sequence[GoldenSet] | None) -> list[GoldenSet]:
    """Golden sets that have books, in ascending query order."""
    return sorted((g for g in golden_sets or () if g.is_defined), key=lambda g: g.query_index)


def max_possible_score(golden_sets: Sequence[GoldenSet] | None) -> float:
    """Best achievable total across all defined golden sets."""
    return sum(len(g.books) * MAX_POINTS_PER_BOOK for g in defined_golden_sets(golden_sets))


def aggregate_app(
    result_sets: Sequence[ResultSet] | None,
    golden_sets: Sequence[GoldenSet] | None,
    query_meta_by_index: Mapping[int, QueryMeta] | None,
) -> AppAggregate:
    """
    Score every golden query for one app and roll up the totals.

    Args:
        result_sets: This app's result sets (at most one per query index)
        golden_sets: Golden sets already filtered to defined (non-empty) ones
        query_meta_by_index: Query index -> metadata, used for category buckets

    Returns:
        AppAggregate with query scores sorted by query index. Golden queries
        without metadata count toward the total but not toward any category.
    """
    result_sets = result_sets or ()
    query_meta_by_index = query_meta_by_index or {}
    results_by_index = {r.query_index: r for r in result_sets}

    aggregate = AppAggregate(
        queries_with_results=sum(
            1 for r in result_sets if result_status(r) is ResultStatus.COMPLETE
        ),
    )

    for golden in golden_sets or ():
        result = results_by_index.get(golden.query_index)
        detail = score_query(result.books if result else (), golden.books)

        meta = query_meta_by_index.get(golden.query_index)
        detail = replace(
            detail,
            query_index=golden.query_index,
            query_text=meta.text if meta else "",
            category=meta.category if meta else "",
        )

        aggregate.total_score += detail.score
        aggregate.query_scores.append(detail)

        if meta is not None:
            bucket = aggregate.category_scores.setdefault(meta.category, CategoryScore())
            bucket.total_score += detail.score
            bucket.max_score += detail.max_score
            bucket.queries_scored += 1

    for bucket in aggregate.category_scores.values():
        bucket.percentage = round_percentage(bucket.total_score, bucket.max_score)

    aggregate.query_scores.sort(key=lambda q: q.query_index)
    return aggregate
