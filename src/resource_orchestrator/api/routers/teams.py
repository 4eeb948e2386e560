from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from resource_orchestrator.api.deps import db_session
from resource_orchestrator.auth.deps import require_roles
from resource_orchestrator.db.repositories.teams import TeamRepo

router = APIRouter(
    prefix="/v1/teams",
    tags=["teams"],
    dependencies=[Depends(require_roles("admin"))],
)


class TeamCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    email: str | None = Field(default=None, max_length=256)
    url: str | None = Field(default=None, max_length=512)


class TeamResponse(BaseModel):
    name: str
    email: str | None
    url: str | None


class AddUserRequest(BaseModel):
    email: str = Field(min_length=3, max_length=256)


@router.post("", response_model=TeamResponse, status_code=HTTP_201_CREATED)
async def create_team(
    body: TeamCreateRequest,
    session: AsyncSession = Depends(db_session),
) -> TeamResponse:
    team = await TeamRepo(session).create(name=body.name, email=body.email, url=body.url)
    await session.commit()
    return TeamResponse(name=team.name, email=team.email, url=team.url)


@router.post("/{team_name}/members", status_code=HTTP_204_NO_CONTENT)
async def add_team_member(
    team_name: str,
    body: AddUserRequest,
    session: AsyncSession = Depends(db_session),
) -> Response:
    await TeamRepo(session).add_user(team_name=team_name, email=body.email)
    await session.commit()
    return Response(status_code=HTTP_204_NO_CONTENT)
