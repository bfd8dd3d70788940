"""Error hierarchy and global FastAPI exception handlers.

Every error leaves the API as ``{"error": "<message>"}``.  Caller input
problems map to 400, storage failures to 500.  Requests that match no
route (unknown path or unsupported method) get an empty 404.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from election_api.core.validation import FieldError

logger = logging.getLogger(__name__)


class ElectionApiError(Exception):
    """Base exception for all errors surfaced by the API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidInputError(ElectionApiError):
    """The request body or parameters are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.details = details or []

    def to_response(self) -> dict[str, Any]:
        payload = super().to_response()
        if self.details:
            payload["details"] = [d.to_dict() for d in self.details]
        return payload


class StorageError(ElectionApiError):
    """A query or connection against the database failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageConstraintError(StorageError):
    """The database rejected a write because of a constraint (e.g. a foreign key)."""

    status_code = status.HTTP_400_BAD_REQUEST


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ElectionApiError)
    async def election_api_error_handler(
        request: Request, exc: ElectionApiError
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "request_failed",
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_message": exc.message,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            FieldError(
                field=".".join(str(loc) for loc in e["loc"]),
                message=e["msg"],
            )
            for e in exc.errors()
        ]
        error = InvalidInputError(" ".join(d.message for d in details), details)
        logger.warning(
            "request_validation_failed",
            extra={"path": request.url.path, "error_message": error.message},
        )
        return JSONResponse(status_code=error.status_code, content=error.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        # Unmatched path or method: catch-all 404 with no body
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            extra={"path": request.url.path, "error_message": str(exc)},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
