"""
tests.test_team_authorization

Team registry + authorization gate against an in-memory SQLite registry.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from resource_orchestrator.auth.gate import TeamAuthorizationGate
from resource_orchestrator.auth.models import Principal
from resource_orchestrator.db.init_db import init_db
from resource_orchestrator.db.repositories.teams import TeamRepo
from resource_orchestrator.db.session import create_sessionmaker
from resource_orchestrator.errors import AlreadyExists, NotFound, PermissionDenied
from resource_orchestrator.services.resource_operations import ResourceOperations
from tests.fakes import FakeClusterGateway, FakeTemplateRenderer, FakeTemplateSource

GOPHER = Principal(subject="gopher@luizalabs.com")
OUTSIDER = Principal(subject="outsider@example.com")
ADMIN = Principal(subject="ops@luizalabs.com", roles=frozenset({"admin"}))


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    async with create_sessionmaker(engine)() as s:
        yield s
    await engine.dispose()


@pytest_asyncio.fixture
async def teams(session: AsyncSession) -> TeamRepo:
    repo = TeamRepo(session)
    await repo.create(name="luizalabs")
    await repo.add_user(team_name="luizalabs", email=GOPHER.email)
    await session.commit()
    return repo


@pytest.mark.asyncio
async def test_team_repo_membership(teams: TeamRepo) -> None:
    assert await teams.is_member(team_name="luizalabs", email=GOPHER.email)
    assert not await teams.is_member(team_name="luizalabs", email=OUTSIDER.email)
    assert not await teams.is_member(team_name="unknown", email=GOPHER.email)


@pytest.mark.asyncio
async def test_team_repo_conflicts(teams: TeamRepo) -> None:
    with pytest.raises(AlreadyExists):
        await teams.create(name="luizalabs")
    with pytest.raises(AlreadyExists):
        await teams.add_user(team_name="luizalabs", email=GOPHER.email)
    with pytest.raises(NotFound):
        await teams.add_user(team_name="unknown", email=GOPHER.email)


@pytest.mark.asyncio
async def test_team_permission(session: AsyncSession, teams: TeamRepo) -> None:
    gate = TeamAuthorizationGate(session=session, owners=FakeClusterGateway())

    assert await gate.has_team_permission(GOPHER, "luizalabs")
    assert not await gate.has_team_permission(OUTSIDER, "luizalabs")
    assert await gate.has_team_permission(ADMIN, "luizalabs")


@pytest.mark.asyncio
async def test_resource_permission_resolves_owner_team(
    session: AsyncSession, teams: TeamRepo
) -> None:
    cluster = FakeClusterGateway()
    cluster.owners.update({"teresa": "luizalabs", "legacy": None})
    gate = TeamAuthorizationGate(session=session, owners=cluster)

    assert await gate.has_resource_permission(GOPHER, "teresa")
    assert not await gate.has_resource_permission(OUTSIDER, "teresa")
    # Unlabelled namespaces are not owned by any team.
    assert not await gate.has_resource_permission(GOPHER, "legacy")
    assert await gate.has_resource_permission(ADMIN, "legacy")
    # Absent namespaces fall through so the delete reports NotFound.
    assert await gate.has_resource_permission(OUTSIDER, "absent")


@pytest.mark.asyncio
async def test_lifecycle_with_registry(session: AsyncSession, teams: TeamRepo, resource) -> None:
    cluster = FakeClusterGateway()
    ops = ResourceOperations(
        templates=FakeTemplateSource(),
        renderer=FakeTemplateRenderer(),
        cluster=cluster,
        gate=TeamAuthorizationGate(session=session, owners=cluster),
    )

    rendered = await ops.create(GOPHER, resource)
    assert rendered.text

    with pytest.raises(PermissionDenied):
        await ops.create(OUTSIDER, resource)
    with pytest.raises(PermissionDenied):
        await ops.delete(OUTSIDER, resource.name)

    await ops.delete(GOPHER, resource.name)
    assert cluster.deleted == [resource.name]
