"""Snapshot input and score output schemas."""

from pydantic import BaseModel, Field, field_validator, model_validator

from worker.scoring import TOTAL_QUERIES

MAX_BOOKS_PER_SET = 9


class BookIn(BaseModel):
    """A ranked book entry as entered by the operator."""

    rank: int = Field(..., ge=1, le=MAX_BOOKS_PER_SET)
    title: str
    author: str

    @field_validator("title", "author")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Trim whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class GoldenSetIn(BaseModel):
    """Golden books for one query. An empty list means not yet defined."""

    query_index: int = Field(..., ge=1, le=TOTAL_QUERIES)
    books: list[BookIn] = Field(default_factory=list, max_length=MAX_BOOKS_PER_SET)


class ResultSetIn(BaseModel):
    """Books one app returned for one query."""

    app_id: str = Field(..., min_length=1)
    query_index: int = Field(..., ge=1, le=TOTAL_QUERIES)
    books: list[BookIn] = Field(default_factory=list, max_length=MAX_BOOKS_PER_SET)
    screenshots: list[str] = Field(default_factory=list)


class QueryIn(BaseModel):
    """One of the fixed benchmark queries."""

    index: int = Field(..., ge=1, le=TOTAL_QUERIES)
    text: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class AppIn(BaseModel):
    """An app under comparison."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., max_length=255)
    logo: str = Field(..., min_length=1)
    notes: str = ""

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str) -> str:
        return v.strip()


class SnapshotIn(BaseModel):
    """Everything the scoring engine reads, as stored on disk."""

    apps: list[AppIn] = Field(default_factory=list)
    queries: list[QueryIn] = Field(default_factory=list)
    golden: list[GoldenSetIn] = Field(default_factory=list)
    results: list[ResultSetIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_keys(self) -> "SnapshotIn":
        """Enforce one query per index, one golden set per query and one result per app+query."""
        _require_unique("apps", [a.id for a in self.apps])
        _require_unique("queries", [q.index for q in self.queries])
        _require_unique("golden", [g.query_index for g in self.golden])
        _require_unique("results", [(r.app_id, r.query_index) for r in self.results])
        return self


def _require_unique(collection: str, keys: list) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise ValueError(f"duplicate {collection} entry for {key!r}")
        seen.add(key)


class QueryScoreRead(BaseModel):
    """Per-query score detail."""

    query_index: int
    query_text: str
    category: str
    hits: int
    position_bonuses: int
    score: float
    max_score: float
    golden_count: int
    matched_results: int = 0


class CategoryScoreRead(BaseModel):
    """Score rollup for one query category."""

    total_score: float
    max_score: float
    queries_scored: int
    percentage: float


class AppScoreRead(BaseModel):
    """Score summary for one app."""

    app_id: str
    app_name: str
    app_logo: str
    total_score: float
    max_score: float
    percentage: float
    queries_scored: int
    queries_with_results: int
    category_scores: dict[str, CategoryScoreRead]
    query_scores: list[QueryScoreRead]
    rank: int | None = None


class LeaderboardRead(BaseModel):
    """Ranked scores for every app."""

    max_possible_score: float
    golden_coverage: int
    total_queries: int
    apps: list[AppScoreRead]
