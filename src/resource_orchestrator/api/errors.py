"""
resource_orchestrator.api.errors

HTTP translation of the orchestrator error taxonomy.

Responsibilities:
- Map PermissionDenied/AlreadyExists/NotFound/InternalServerError to status codes.
- Keep internal causes out of response bodies.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from resource_orchestrator.errors import (
    AlreadyExists,
    InternalServerError,
    NotFound,
    OrchestratorError,
    PermissionDenied,
)

_STATUS: dict[type[OrchestratorError], int] = {
    PermissionDenied: HTTP_403_FORBIDDEN,
    AlreadyExists: HTTP_409_CONFLICT,
    NotFound: HTTP_404_NOT_FOUND,
    InternalServerError: HTTP_500_INTERNAL_SERVER_ERROR,
}


async def orchestrator_error_handler(_: Request, exc: OrchestratorError) -> JSONResponse:
    status = _STATUS.get(type(exc), HTTP_500_INTERNAL_SERVER_ERROR)
    # InternalServerError carries its cause for logs only; the body uses the generic message.
    detail = exc.message if isinstance(exc, InternalServerError) else str(exc)
    return JSONResponse(status_code=status, content={"detail": detail, "code": exc.code})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrchestratorError, orchestrator_error_handler)
