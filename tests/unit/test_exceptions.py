"""Tests for custom exceptions and error handling."""

import pytest
from fastapi import status
from httpx import ASGITransport, AsyncClient

from api.exceptions import BenchError, NotFoundError, ValidationError
from api.main import create_app


def test_bench_error_base() -> None:
    """Test base BenchError."""
    error = BenchError(message="Test error", code="test_error")
    assert error.message == "Test error"
    assert error.code == "test_error"
    assert error.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert error.details == {}
    assert str(error) == "Test error"


def test_not_found_error() -> None:
    """Test NotFoundError."""
    error = NotFoundError("App")
    assert error.message == "App not found"
    assert error.code == "not_found"
    assert error.status_code == status.HTTP_404_NOT_FOUND

    error_with_id = NotFoundError("App", "libby")
    assert error_with_id.message == "App with id 'libby' not found"


def test_validation_error() -> None:
    """Test ValidationError."""
    error = ValidationError("Input should be less than or equal to 50", field="golden.0.query_index")
    assert error.code == "validation_error"
    assert error.status_code == 422
    assert error.details == {"field": "golden.0.query_index"}


def test_validation_error_with_errors() -> None:
    """Test ValidationError carries the full error list."""
    errors = [{"loc": ["apps", 0, "name"], "msg": "Field required"}]
    error = ValidationError("Field required", errors=errors)
    assert error.details == {"errors": errors}


def test_exceptions_inherit_from_base() -> None:
    """All custom exceptions inherit from BenchError."""
    assert issubclass(NotFoundError, BenchError)
    assert issubclass(ValidationError, BenchError)


@pytest.mark.asyncio
async def test_request_validation_envelope() -> None:
    """Request validation errors use the same envelope as application errors."""
    app = create_app()

    @app.get("/v1/items")
    async def list_items(limit: int) -> dict[str, int]:
        return {"limit": limit}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/v1/items", params={"limit": "many"})

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert "field" not in error
    assert error["details"]["field"] == "limit"
    assert error["details"]["errors"][0]["loc"] == ["query", "limit"]
