"""Per-query scoring of an app's result list against a golden list.

Each golden book found in the result list (by normalized title + author)
earns a hit. A hit earns an extra position bonus when the app listed the
book at the golden rank or better.

    score     = hits + position_bonuses * 0.5
    max_score = golden_count * 1.5
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from worker.scoring.normalize import same_work

HIT_POINTS = 1.0
POSITION_BONUS_POINTS = 0.5
MAX_POINTS_PER_BOOK = HIT_POINTS + POSITION_BONUS_POINTS


@dataclass(frozen=True)
class Book:
    """A ranked book entry in a golden or result list."""

    rank: int | None  # 1-based; None never earns a position bonus
    title: str
    author: str

    def to_dict(self) -> dict[str, Any]:
        return {"rank": self.rank, "title": self.title, "author": self.author}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        return cls(
            rank=data.get("rank"),
            title=data.get("title", ""),
            author=data.get("author", ""),
        )


@dataclass(frozen=True)
class QueryScoreDetail:
    """Score breakdown for one golden query."""

    hits: int
    position_bonuses: int
    score: float
    max_score: float
    golden_count: int
    matched_results: int = 0  # result rows matching any golden book; display only

    # Tagged by the aggregator; presentation only
    query_index: int = 0
    query_text: str = ""
    category: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "query_index": self.query_index,
            "query_text": self.query_text,
            "category": self.category,
            "hits": self.hits,
            "position_bonuses": self.position_bonuses,
            "score": self.score,
            "max_score": self.max_score,
            "golden_count": self.golden_count,
            "matched_results": self.matched_results,
        }


def find_first_match(result_books: Sequence[Book], golden: Book) -> Book | None:
    """Return the first result book that is the same work as ``golden``."""
    for book in result_books:
        if same_work(book.title, book.author, golden.title, golden.author):
            return book
    return None


def is_golden_match(book: Book, golden_books: Sequence[Book] | None) -> bool:
    """True when ``book`` is the same work as any golden book, ignoring rank."""
    return any(
        same_work(book.title, book.author, golden.title, golden.author)
        for golden in golden_books or ()
    )


def count_golden_matches(
    result_books: Sequence[Book] | None,
    golden_books: Sequence[Book] | None,
) -> int:
    """Count result rows that are golden hits. Duplicate rows each count."""
    return sum(1 for book in result_books or () if is_golden_match(book, golden_books))


def earns_position_bonus(match: Book, golden: Book) -> bool:
    """A match at the golden rank or better earns a bonus. Unranked never does."""
    if match.rank is None or golden.rank is None:
        return False
    return match.rank <= golden.rank


def score_query(
    result_books: Sequence[Book] | None,
    golden_books: Sequence[Book] | None,
) -> QueryScoreDetail:
    """
    Score one app's answer list against one query's golden list.

    Golden books are visited in golden order and each independently takes
    the first matching result row, so one result row may satisfy two
    near-duplicate golden rows.

    Args:
        result_books: Books the app returned (None or empty for no answer)
        golden_books: Curated ground-truth books (None or empty if undefined)

    Returns:
        QueryScoreDetail; all zeros when no golden books are defined
    """
    if not golden_books:
        return QueryScoreDetail(
            hits=0,
            position_bonuses=0,
            score=0.0,
            max_score=0.0,
            golden_count=0,
        )

    golden_count = len(golden_books)
    max_score = golden_count * MAX_POINTS_PER_BOOK

    if not result_books:
        return QueryScoreDetail(
            hits=0,
            position_bonuses=0,
            score=0.0,
            max_score=max_score,
            golden_count=golden_count,
        )

    hits = 0
    position_bonuses = 0
    for golden in golden_books:
        match = find_first_match(result_books, golden)
        if match is None:
            continue
        hits += 1
        if earns_position_bonus(match, golden):
            position_bonuses += 1

    return QueryScoreDetail(
        hits=hits,
        position_bonuses=position_bonuses,
        score=hits * HIT_POINTS + position_bonuses * POSITION_BONUS_POINTS,
        max_score=max_score,
        golden_count=golden_count,
        matched_results=count_golden_matches(result_books, golden_books),
    )
