"""Error envelope shared by every route.

Every failure leaves the API as::

    {"error": {"code": ..., "message": ..., "details": [{"field", "reason"}]}}
"""

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the actual field name.
_LOCATION_PREFIXES = ("body", "query", "path", "header")


@dataclass(frozen=True)
class FieldProblem:
    field: str
    reason: str


class ApiError(Exception):
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(
        self,
        details: Sequence[FieldProblem] = (),
        message: str | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        self.details = list(details)
        super().__init__(self.message)

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=error_body(self.code, self.message, self.details),
        )


class ValidationFailed(ApiError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class NotFound(ApiError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Check not found"


def error_body(
    code: str, message: str, details: Sequence[FieldProblem]
) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": [asdict(problem) for problem in details],
        }
    }


def _problem_from_pydantic(error: dict[str, Any]) -> FieldProblem:
    if error.get("type") == "json_invalid":
        return FieldProblem(field="body", reason=error["msg"])
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATION_PREFIXES:
        loc = loc[1:]
    return FieldProblem(field=".".join(loc) or "body", reason=error["msg"])


async def handle_api_error(request: Request, exc: Exception) -> JSONResponse:
    return cast(ApiError, exc).to_response()


async def handle_request_validation(request: Request, exc: Exception) -> JSONResponse:
    errors = cast(RequestValidationError, exc).errors()
    problems = [_problem_from_pydantic(error) for error in errors]
    return ValidationFailed(problems).to_response()


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return ApiError().to_response()


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
