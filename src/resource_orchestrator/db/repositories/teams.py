from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from resource_orchestrator.db.models import Team, TeamMember
from resource_orchestrator.errors import AlreadyExists, NotFound


class TeamRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, name: str, email: str | None = None, url: str | None = None) -> Team:
        if await self.get_by_name(name) is not None:
            raise AlreadyExists(f"team {name!r} already exists")
        team = Team(name=name, email=email, url=url)
        self._session.add(team)
        await self._session.flush()
        return team

    async def get_by_name(self, name: str) -> Team | None:
        stmt = select(Team).where(Team.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def add_user(self, *, team_name: str, email: str) -> TeamMember:
        team = await self.get_by_name(team_name)
        if team is None:
            raise NotFound(f"team {team_name!r} not found")
        if await self._membership(team.id, email) is not None:
            raise AlreadyExists(f"{email} is already a member of {team_name!r}")
        member = TeamMember(team_id=team.id, email=email)
        self._session.add(member)
        await self._session.flush()
        return member

    async def is_member(self, *, team_name: str, email: str) -> bool:
        stmt = (
            select(TeamMember.id)
            .join(Team, Team.id == TeamMember.team_id)
            .where(Team.name == team_name, TeamMember.email == email)
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none() is not None

    async def _membership(self, team_id: uuid.UUID, email: str) -> TeamMember | None:
        stmt = select(TeamMember).where(TeamMember.team_id == team_id, TeamMember.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()
