"""Snapshot service: supplies the scoring engine with its input collections.

The snapshot is a JSON document holding apps, queries, golden sets and
recorded results. It is re-read on every call so that scores always
reflect the current file; nothing derived is cached.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from api.config import get_settings
from api.exceptions import NotFoundError, ValidationError
from api.schemas.scores import BookIn, SnapshotIn
from worker.scoring import (
    App,
    AppScoreReport,
    Book,
    GoldenSet,
    Leaderboard,
    QueryMeta,
    ResultSet,
    rank_leaderboard,
    score_app,
)

logger = structlog.get_logger(__name__)


@dataclass
class Snapshot:
    """Validated input collections in engine form."""

    apps: list[App] = field(default_factory=list)
    golden_sets: list[GoldenSet] = field(default_factory=list)
    result_sets: list[ResultSet] = field(default_factory=list)
    query_meta_by_index: dict[int, QueryMeta] = field(default_factory=dict)

    def get_app(self, app_id: str) -> App | None:
        return next((a for a in self.apps if a.id == app_id), None)


def _to_books(books: list[BookIn]) -> tuple[Book, ...]:
    return tuple(Book(rank=b.rank, title=b.title, author=b.author) for b in books)


def to_snapshot(data: SnapshotIn) -> Snapshot:
    """Convert validated input schemas into engine types."""
    return Snapshot(
        apps=[App(id=a.id, name=a.name, logo=a.logo, notes=a.notes) for a in data.apps],
        golden_sets=[
            GoldenSet(query_index=g.query_index, books=_to_books(g.books)) for g in data.golden
        ],
        result_sets=[
            ResultSet(app_id=r.app_id, query_index=r.query_index, books=_to_books(r.books))
            for r in data.results
        ],
        query_meta_by_index={
            q.index: QueryMeta(
                index=q.index,
                category=q.category,
                text=q.text,
                description=q.description,
            )
            for q in data.queries
        },
    )


class SnapshotService:
    """Loads the snapshot file and runs the scoring engine over it."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Snapshot:
        """
        Read and validate the snapshot file.

        A missing file is an empty data set. Unparseable or invalid content
        raises ValidationError.
        """
        if not self.path.exists():
            logger.info("snapshot_missing", path=str(self.path))
            return Snapshot()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise ValidationError(f"Snapshot is not valid UTF-8: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise ValidationError(f"Snapshot is not valid JSON: {e.msg}") from e

        try:
            data = SnapshotIn.model_validate(raw)
        except PydanticValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            first = errors[0] if errors else {"msg": "Invalid snapshot", "loc": ()}
            raise ValidationError(
                message=first["msg"],
                field=".".join(str(loc) for loc in first["loc"]) or None,
                errors=errors,
            ) from e

        snapshot = to_snapshot(data)
        logger.debug(
            "snapshot_loaded",
            path=str(self.path),
            apps=len(snapshot.apps),
            golden_sets=len(snapshot.golden_sets),
            result_sets=len(snapshot.result_sets),
        )
        return snapshot

    def leaderboard(self) -> Leaderboard:
        """Rank every app in the snapshot."""
        snapshot = self.load()
        return rank_leaderboard(
            snapshot.apps,
            snapshot.result_sets,
            snapshot.golden_sets,
            snapshot.query_meta_by_index,
        )

    def app_report(self, app_id: str) -> AppScoreReport:
        """Score one app. Rank is not computed here; use the leaderboard for ranks."""
        snapshot = self.load()
        app = snapshot.get_app(app_id)
        if app is None:
            raise NotFoundError("App", app_id)
        return score_app(
            app,
            snapshot.result_sets,
            snapshot.golden_sets,
            snapshot.query_meta_by_index,
        )


def get_snapshot_service() -> SnapshotService:
    """Snapshot service for the configured snapshot path."""
    return SnapshotService(get_settings().snapshot_path)
