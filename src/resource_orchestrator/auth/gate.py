"""
resource_orchestrator.auth.gate

Team-membership authorization gate used by the resource orchestrator.

Responsibilities:
- Decide whether a user may act on behalf of a team (membership in the team registry).
- Resolve the owning team of an existing resource (namespace label) before applying the
  same membership rule.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from resource_orchestrator.auth.models import Principal
from resource_orchestrator.cluster.errors import is_not_found
from resource_orchestrator.db.repositories.teams import TeamRepo
from resource_orchestrator.observability.logging import get_logger

log = get_logger(__name__)


class NamespaceOwnerLookup(Protocol):
    # Returns the owning team label, None when unlabelled; raises a not-found ClusterError
    # when the namespace does not exist.
    async def namespace_team(self, namespace: str) -> str | None: ...


class TeamAuthorizationGate:
    def __init__(self, *, session: AsyncSession, owners: NamespaceOwnerLookup) -> None:
        self._teams = TeamRepo(session)
        self._owners = owners

    async def has_team_permission(self, user: Principal, team_name: str) -> bool:
        # Authz: admin is allowed to bypass membership checks (ops/debug).
        if user.is_admin:
            return True
        return await self._teams.is_member(team_name=team_name, email=user.email)

    async def has_resource_permission(self, user: Principal, name: str) -> bool:
        if user.is_admin:
            return True
        try:
            team_name = await self._owners.namespace_team(name)
        except Exception as e:
            if is_not_found(e):
                # Nothing to protect; let the delete report NotFound.
                return True
            raise
        if team_name is None:
            log.info("resource_owner_unknown", resource=name, user=user.email)
            return False
        return await self._teams.is_member(team_name=team_name, email=user.email)


# --- Module Notes -----------------------------------------------------------
# Owner resolution reads the team label written by `KubernetesGateway.create_namespace_from_name`.
