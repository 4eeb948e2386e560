"""
resource_orchestrator.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints and
  passed to the orchestrator as the acting user.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. `subject` is the user's email.
    """

    subject: str
    roles: frozenset[str] = frozenset()

    @property
    def email(self) -> str:
        return self.subject

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is used across API, services, and the authorization gate.
