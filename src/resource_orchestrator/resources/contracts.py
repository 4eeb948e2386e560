"""
resource_orchestrator.resources.contracts

Collaborator interfaces consumed by `ResourceOperations`.

Responsibilities:
- Describe the template source, renderer, cluster gateway and authorization gate as
  explicit protocols so implementations are injected at construction time.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import BinaryIO, Protocol

from resource_orchestrator.auth.models import Principal
from resource_orchestrator.resources.models import Setting


class TemplateSource(Protocol):
    # Returned streams are owned (and closed) by the caller.
    async def template(self, name: str) -> BinaryIO: ...

    async def welcome_template(self, name: str) -> BinaryIO: ...


class TemplateRenderer(Protocol):
    async def execute(
        self, output: BinaryIO, template: BinaryIO, settings: Sequence[Setting]
    ) -> None: ...


class ClusterGateway(Protocol):
    async def create_namespace_from_name(
        self, namespace: str, team_name: str, user_email: str
    ) -> None: ...

    async def create(self, namespace: str, manifest: BinaryIO) -> None: ...

    async def delete_namespace(self, namespace: str) -> None: ...

    def is_already_exists(self, err: BaseException) -> bool: ...

    def is_not_found(self, err: BaseException) -> bool: ...


class AuthorizationGate(Protocol):
    async def has_team_permission(self, user: Principal, team_name: str) -> bool: ...

    # Team ownership of `name` is resolved by the gate, not by the orchestrator.
    async def has_resource_permission(self, user: Principal, name: str) -> bool: ...


# --- Module Notes -----------------------------------------------------------
# Production implementations:
# - TemplateSource   -> templates.filesystem.FileSystemTemplateSource
# - TemplateRenderer -> templates.jinja.JinjaTemplateRenderer
# - ClusterGateway   -> cluster.kubernetes.KubernetesGateway
# - AuthorizationGate -> auth.gate.TeamAuthorizationGate
