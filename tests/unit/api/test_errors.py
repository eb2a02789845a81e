from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI
from pydantic import BaseModel

from vehicle_checks.base.errors import (
    FieldProblem,
    NotFound,
    ValidationFailed,
    error_body,
    register_error_handlers,
)


class _Payload(BaseModel):
    count: int


@pytest.fixture
def app() -> FastAPI:
    test_app = FastAPI()
    register_error_handlers(test_app)

    @test_app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("secret connection string")

    @test_app.get("/missing")
    async def missing() -> None:
        raise NotFound(message="Vehicle not found")

    @test_app.post("/typed")
    async def typed(body: _Payload) -> dict[str, int]:
        return {"count": body.count}

    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)  # type: ignore[arg-type]
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestErrorBody:
    def test_shape(self) -> None:
        assert error_body(
            "VALIDATION_ERROR", "Invalid request", [FieldProblem("note", "too long")]
        ) == {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request",
                "details": [{"field": "note", "reason": "too long"}],
            }
        }

    def test_defaults(self) -> None:
        exc = ValidationFailed([FieldProblem("items", "is required")])

        assert exc.status_code == 400
        assert exc.code == "VALIDATION_ERROR"
        assert exc.message == "Invalid request"
        assert str(exc) == "Invalid request"


class TestHandlers:
    async def test_unexpected_error_is_generic(
        self, client: httpx.AsyncClient
    ) -> None:
        resp = await client.get("/boom")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "Internal server error",
                "details": [],
            }
        }
        assert "secret" not in resp.text

    async def test_custom_message(self, client: httpx.AsyncClient) -> None:
        resp = await client.get("/missing")

        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Vehicle not found"

    async def test_request_validation_uses_envelope(
        self, client: httpx.AsyncClient
    ) -> None:
        resp = await client.post("/typed", json={"count": "many"})

        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert [detail["field"] for detail in error["details"]] == ["count"]
