"""
resource_orchestrator.services.resource_operations

Resource lifecycle service (provision / tear down a team-scoped namespace).

Responsibilities:
- Sequence authorization, template fetch, namespace creation, render and manifest apply.
- Translate collaborator failures into the stable error taxonomy (`resource_orchestrator.errors`).
- Close template streams on every exit path and bound each outbound call with a timeout.
"""

from __future__ import annotations

import asyncio
import io
from collections.abc import Awaitable
from contextlib import ExitStack
from typing import BinaryIO, TypeVar

import structlog

from resource_orchestrator.auth.models import Principal
from resource_orchestrator.errors import (
    AlreadyExists,
    InternalServerError,
    NotFound,
    PermissionDenied,
)
from resource_orchestrator.observability.logging import get_logger
from resource_orchestrator.resources.contracts import (
    AuthorizationGate,
    ClusterGateway,
    TemplateRenderer,
    TemplateSource,
)
from resource_orchestrator.resources.models import RenderedResource, Resource

log = get_logger(__name__)

T = TypeVar("T")


class ResourceOperations:
    """
    Stateless orchestrator; one instance can serve concurrent requests.
    No step is retried and nothing is locked client-side: name conflicts are detected
    by the cluster and surfaced as `AlreadyExists`.
    """

    def __init__(
        self,
        *,
        templates: TemplateSource,
        renderer: TemplateRenderer,
        cluster: ClusterGateway,
        gate: AuthorizationGate,
        timeout: float = 30.0,
        rollback_on_failure: bool = False,
    ) -> None:
        self._templates = templates
        self._renderer = renderer
        self._cluster = cluster
        self._gate = gate
        self._timeout = timeout
        self._rollback_on_failure = rollback_on_failure

    async def create(self, user: Principal, resource: Resource) -> RenderedResource:
        blog = log.bind(resource=resource.name, team=resource.team_name, user=user.email)

        try:
            allowed = await self._bounded(self._gate.has_team_permission(user, resource.team_name))
        except Exception as e:
            raise _internal(blog, "authorize", e) from e
        if not allowed:
            blog.info("permission_denied", action="create")
            raise PermissionDenied()

        with ExitStack() as streams:
            try:
                template = streams.enter_context(
                    await self._bounded(self._templates.template(resource.name))
                )
            except Exception as e:
                raise _internal(blog, "fetch_template", e) from e

            try:
                welcome = streams.enter_context(
                    await self._bounded(self._templates.welcome_template(resource.name))
                )
            except Exception as e:
                raise _internal(blog, "fetch_welcome_template", e) from e

            try:
                await self._bounded(
                    self._cluster.create_namespace_from_name(
                        resource.name, resource.team_name, user.email
                    )
                )
            except Exception as e:
                if self._cluster.is_already_exists(e):
                    blog.info("resource_already_exists")
                    raise AlreadyExists() from e
                raise _internal(blog, "create_namespace", e) from e

            try:
                text = await self._provision(blog, resource, template, welcome)
            except InternalServerError:
                if self._rollback_on_failure:
                    await self._rollback(blog, resource.name)
                raise

        blog.info("resource_created")
        return RenderedResource(name=resource.name, namespace=resource.name, text=text)

    async def delete(self, user: Principal, name: str) -> None:
        blog = log.bind(resource=name, user=user.email)

        try:
            allowed = await self._bounded(self._gate.has_resource_permission(user, name))
        except Exception as e:
            raise _internal(blog, "authorize", e) from e
        if not allowed:
            blog.info("permission_denied", action="delete")
            raise PermissionDenied()

        try:
            await self._bounded(self._cluster.delete_namespace(name))
        except Exception as e:
            if self._cluster.is_not_found(e):
                blog.info("resource_not_found")
                raise NotFound() from e
            raise _internal(blog, "delete_namespace", e) from e

        blog.info("resource_deleted")

    async def _provision(
        self,
        blog: structlog.stdlib.BoundLogger,
        resource: Resource,
        template: BinaryIO,
        welcome: BinaryIO,
    ) -> str:
        manifest = io.BytesIO()
        try:
            await self._bounded(self._renderer.execute(manifest, template, resource.settings))
        except Exception as e:
            raise _internal(blog, "render_template", e) from e

        manifest.seek(0)
        try:
            await self._bounded(self._cluster.create(resource.name, manifest))
        except Exception as e:
            raise _internal(blog, "apply_manifest", e) from e

        out = io.BytesIO()
        try:
            await self._bounded(self._renderer.execute(out, welcome, resource.settings))
        except Exception as e:
            raise _internal(blog, "render_welcome_template", e) from e
        return out.getvalue().decode("utf-8", errors="replace")

    async def _rollback(self, blog: structlog.stdlib.BoundLogger, namespace: str) -> None:
        try:
            await self._bounded(self._cluster.delete_namespace(namespace))
        except Exception as e:
            # The original failure is what the caller sees; this one is only logged.
            blog.warning("rollback_failed", error=str(e), exc_info=e)
            return
        blog.info("namespace_rolled_back")

    async def _bounded(self, call: Awaitable[T]) -> T:
        # Cancellation of the calling task propagates through; only the deadline is added here.
        async with asyncio.timeout(self._timeout):
            return await call


def _internal(
    blog: structlog.stdlib.BoundLogger, step: str, err: Exception
) -> InternalServerError:
    blog.error("resource_operation_failed", step=step, error=str(err), exc_info=err)
    return InternalServerError(err)


# --- Module Notes -----------------------------------------------------------
# Classification predicates are consulted only around namespace create/delete; every other
# failure (including timeouts) is reported as InternalServerError with the cause attached.
