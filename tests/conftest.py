"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Drop any logger bound to a per-test capture stream."""
    yield
    structlog.reset_defaults()


def book(rank: int, title: str, author: str) -> dict[str, Any]:
    return {"rank": rank, "title": title, "author": author}


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    """
    A small benchmark snapshot.

    Expected scores (max possible 6.0 over 3 defined golden queries):
    - libby: 5.5 (rank 1)
    - goodreads: 2.5 (rank 2)
    - storygraph: 2.5 (rank 2, tied)
    - kindle: 0.0 (rank 4)
    """
    return {
        "apps": [
            {"id": "libby", "name": "Libby", "logo": "/uploads/libby.png"},
            {"id": "goodreads", "name": "Goodreads", "logo": "/uploads/goodreads.png"},
            {"id": "storygraph", "name": "StoryGraph", "logo": "/uploads/storygraph.png"},
            {"id": "kindle", "name": "Kindle", "logo": "/uploads/kindle.png", "notes": "iOS"},
        ],
        "queries": [
            {
                "index": 1,
                "text": "dune frank herbert",
                "description": "Title + author combo baseline",
                "category": "baseline",
            },
            {
                "index": 2,
                "text": "gone girl",
                "description": "Trad thriller baseline",
                "category": "baseline",
            },
            {
                "index": 3,
                "text": "harry poter",
                "description": "Misspelled famous title",
                "category": "typo",
            },
            {
                "index": 4,
                "text": "lord of the",
                "description": "Partial famous title",
                "category": "partial",
            },
        ],
        "golden": [
            {
                "query_index": 1,
                "books": [
                    book(1, "Dune", "Frank Herbert"),
                    book(2, "Dune Messiah", "Frank Herbert"),
                ],
            },
            {"query_index": 2, "books": [book(1, "Gone Girl", "Gillian Flynn")]},
            {
                "query_index": 3,
                "books": [book(1, "Harry Potter and the Sorcerer's Stone", "J.K. Rowling")],
            },
            {"query_index": 4, "books": []},
        ],
        "results": [
            {
                "app_id": "libby",
                "query_index": 1,
                "books": [
                    book(1, "Dune", "Frank Herbert"),
                    book(2, "Dune Messiah", "Frank Herbert"),
                ],
            },
            {
                "app_id": "libby",
                "query_index": 2,
                "books": [book(2, "gone girl ", "GILLIAN FLYNN")],
            },
            {
                "app_id": "libby",
                "query_index": 3,
                "books": [book(1, "Harry Potter and the Sorcerer’s Stone", "J.K. Rowling")],
            },
            {
                "app_id": "goodreads",
                "query_index": 1,
                "books": [
                    book(1, "Dune Messiah", "Frank Herbert"),
                    book(2, "Dune", "Frank Herbert"),
                ],
            },
            {"app_id": "goodreads", "query_index": 3, "books": []},
            {
                "app_id": "goodreads",
                "query_index": 4,
                "books": [book(1, "The Fellowship of the Ring", "J.R.R. Tolkien")],
            },
            {
                "app_id": "storygraph",
                "query_index": 1,
                "books": [
                    book(1, "Dune Messiah", "Frank Herbert"),
                    book(2, "Dune", "Frank Herbert"),
                ],
            },
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
    """Snapshot data written to a temporary JSON file."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
async def client(snapshot_file: Path) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client reading from the temporary snapshot."""
    from api.main import app
    from api.services.snapshot_service import SnapshotService, get_snapshot_service

    app.dependency_overrides[get_snapshot_service] = lambda: SnapshotService(snapshot_file)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
