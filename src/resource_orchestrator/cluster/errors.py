"""
resource_orchestrator.cluster.errors

Transport-independent cluster error type and classification predicates.

Responsibilities:
- Give gateways a single error type to raise (`ClusterError`) with a coarse `reason`.
- Provide pure predicates the orchestrator uses to classify failures.
"""

from __future__ import annotations

import enum


class ClusterErrorReason(enum.StrEnum):
    already_exists = "AlreadyExists"
    not_found = "NotFound"
    invalid = "Invalid"
    unknown = "Unknown"


class ClusterError(Exception):
    def __init__(self, reason: ClusterErrorReason, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.status = status


def is_already_exists(err: BaseException | None) -> bool:
    return isinstance(err, ClusterError) and err.reason is ClusterErrorReason.already_exists


def is_not_found(err: BaseException | None) -> bool:
    return isinstance(err, ClusterError) and err.reason is ClusterErrorReason.not_found


# --- Module Notes -----------------------------------------------------------
# Predicates never raise and return False for anything that is not a ClusterError.
