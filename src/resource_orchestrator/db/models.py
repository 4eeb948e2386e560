"""
resource_orchestrator.db.models

Team registry schema.

Responsibilities:
- Define ORM models used by the authorization gate:
  - Team: a named group that owns resources
  - TeamMember: membership of a user (by email) in a team
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from resource_orchestrator.db.base import Base


def _utcnow() -> datetime:
    # Stored naive (UTC) so SQLite and Postgres compare the same way.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    members: Mapped[list[TeamMember]] = relationship(
        back_populates="team", cascade="all, delete-orphan"
    )


class TeamMember(Base):
    __tablename__ = "team_members"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    team_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("teams.id"), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String(256), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    team: Mapped[Team] = relationship(back_populates="members")

    __table_args__ = (UniqueConstraint("team_id", "email", name="uq_team_members_team_email"),)


# --- Module Notes -----------------------------------------------------------
# Resources themselves are not stored here: the namespace in the cluster is their only state.
