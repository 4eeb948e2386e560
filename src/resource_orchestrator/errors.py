"""
resource_orchestrator.errors

Stable error taxonomy shared by the orchestrator, the API layer and logs.

Responsibilities:
- Define the four caller-facing outcomes (permission denied, already exists, not found,
  internal server error) with stable codes.
- Keep the original cause of internal errors for diagnostics without exposing it to callers.
"""

from __future__ import annotations

from typing import ClassVar


class OrchestratorError(Exception):
    """Base class for every error surfaced to callers."""

    code: ClassVar[str] = "unknown"
    message: ClassVar[str] = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class PermissionDenied(OrchestratorError):
    code = "permission_denied"
    message = "Permission denied"


class AlreadyExists(OrchestratorError):
    code = "already_exists"
    message = "Resource already exists"


class NotFound(OrchestratorError):
    code = "not_found"
    message = "Resource not found"


class InternalServerError(OrchestratorError):
    """
    Envelope for unclassified failures.
    The cause is kept on `.cause` (and chained as `__cause__` when raised with `from`).
    """

    code = "internal_server_error"
    message = "Internal server error"

    def __init__(self, cause: BaseException | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.cause = cause


def error_code(err: BaseException) -> str:
    # Anything outside the taxonomy is an internal error from the caller's point of view.
    if isinstance(err, OrchestratorError):
        return err.code
    return InternalServerError.code


# --- Module Notes -----------------------------------------------------------
# PermissionDenied/AlreadyExists/NotFound are raised unwrapped so callers can branch on type.
