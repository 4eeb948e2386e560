"""
tests.test_resource_operations

Behaviour of the resource orchestrator against fake collaborators.
"""

from __future__ import annotations

import asyncio

import pytest

from resource_orchestrator.auth.models import Principal
from resource_orchestrator.errors import (
    AlreadyExists,
    InternalServerError,
    NotFound,
    PermissionDenied,
    error_code,
)
from resource_orchestrator.services.resource_operations import ResourceOperations
from resource_orchestrator.templates.jinja import JinjaTemplateRenderer
from tests.fakes import (
    FakeAuthorizationGate,
    FakeClusterGateway,
    FakeTemplateRenderer,
    FakeTemplateSource,
)


def _ops(
    *,
    gate: FakeAuthorizationGate,
    templates: FakeTemplateSource | None = None,
    renderer: FakeTemplateRenderer | None = None,
    cluster: FakeClusterGateway | None = None,
    **kwargs,
) -> ResourceOperations:
    return ResourceOperations(
        templates=templates or FakeTemplateSource(),
        renderer=renderer or FakeTemplateRenderer(),
        cluster=cluster or FakeClusterGateway(),
        gate=gate,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_create_success(user, resource, member_gate) -> None:
    cluster = FakeClusterGateway()
    renderer = FakeTemplateRenderer()
    ops = _ops(gate=member_gate, cluster=cluster, renderer=renderer)

    rendered = await ops.create(user, resource)

    assert rendered.text == "Test Representation"
    assert rendered.namespace == resource.name
    assert cluster.created_namespaces == [("teresa", "luizalabs", "gopher@luizalabs.com")]
    assert cluster.applied == [("teresa", b"Test Representation")]
    # Settings are passed through verbatim, in order, to both renders.
    assert renderer.calls == [list(resource.settings), list(resource.settings)]


@pytest.mark.asyncio
async def test_create_permission_denied(user, resource) -> None:
    cluster = FakeClusterGateway()
    templates = FakeTemplateSource()
    gate = FakeAuthorizationGate(members={"luizalabs": set()})
    ops = _ops(gate=gate, cluster=cluster, templates=templates)

    with pytest.raises(PermissionDenied):
        await ops.create(user, resource)

    assert cluster.created_namespaces == []
    assert cluster.applied == []
    assert templates.opened == []


@pytest.mark.asyncio
async def test_create_already_exists(user, resource, member_gate) -> None:
    cluster = FakeClusterGateway(
        create_namespace_err=RuntimeError("test"), is_already_exists_err=True
    )
    ops = _ops(gate=member_gate, cluster=cluster)

    with pytest.raises(AlreadyExists) as exc_info:
        await ops.create(user, resource)

    assert type(exc_info.value) is AlreadyExists
    assert cluster.applied == []


@pytest.mark.asyncio
async def test_create_namespace_unclassified_error(user, resource, member_gate) -> None:
    cause = RuntimeError("apiserver unavailable")
    ops = _ops(gate=member_gate, cluster=FakeClusterGateway(create_namespace_err=cause))

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    assert exc_info.value.cause is cause


@pytest.mark.parametrize(
    "case",
    ["template", "welcome_template", "render", "apply", "render_welcome"],
)
@pytest.mark.asyncio
async def test_create_internal_server_error(user, resource, member_gate, case) -> None:
    cause = RuntimeError("test")
    templates = FakeTemplateSource()
    renderer = FakeTemplateRenderer()
    cluster = FakeClusterGateway()
    if case == "template":
        templates = FakeTemplateSource(err=cause)
    elif case == "welcome_template":
        templates = FakeTemplateSource(welcome_err=cause)
    elif case == "render":
        renderer = FakeTemplateRenderer(err=cause, fail_on=1)
    elif case == "apply":
        cluster = FakeClusterGateway(resources_err=cause)
    else:
        renderer = FakeTemplateRenderer(err=cause, fail_on=2)
    ops = _ops(gate=member_gate, templates=templates, renderer=renderer, cluster=cluster)

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    err = exc_info.value
    assert error_code(err) == "internal_server_error"
    assert err.cause is cause
    assert err.__cause__ is cause


@pytest.mark.asyncio
async def test_create_closes_template_streams_on_every_path(user, resource, member_gate) -> None:
    templates = FakeTemplateSource()
    ops = _ops(
        gate=member_gate,
        templates=templates,
        cluster=FakeClusterGateway(resources_err=RuntimeError("boom")),
    )
    with pytest.raises(InternalServerError):
        await ops.create(user, resource)
    assert len(templates.opened) == 2
    assert all(s.closed for s in templates.opened)

    templates = FakeTemplateSource(welcome_err=RuntimeError("missing"))
    ops = _ops(gate=member_gate, templates=templates)
    with pytest.raises(InternalServerError):
        await ops.create(user, resource)
    assert len(templates.opened) == 1
    assert templates.opened[0].closed

    templates = FakeTemplateSource()
    await _ops(gate=member_gate, templates=templates).create(user, resource)
    assert all(s.closed for s in templates.opened)


@pytest.mark.asyncio
async def test_create_failure_leaves_namespace_by_default(user, resource, member_gate) -> None:
    cluster = FakeClusterGateway(resources_err=RuntimeError("boom"))
    ops = _ops(gate=member_gate, cluster=cluster)

    with pytest.raises(InternalServerError):
        await ops.create(user, resource)

    assert cluster.deleted == []


@pytest.mark.asyncio
async def test_create_failure_rolls_back_namespace_when_enabled(
    user, resource, member_gate
) -> None:
    cluster = FakeClusterGateway(resources_err=RuntimeError("boom"))
    ops = _ops(gate=member_gate, cluster=cluster, rollback_on_failure=True)

    with pytest.raises(InternalServerError):
        await ops.create(user, resource)

    assert cluster.deleted == ["teresa"]


@pytest.mark.asyncio
async def test_rollback_failure_keeps_original_error(user, resource, member_gate) -> None:
    cause = RuntimeError("render failed")
    cluster = FakeClusterGateway(delete_namespace_err=RuntimeError("delete failed"))
    ops = _ops(
        gate=member_gate,
        cluster=cluster,
        renderer=FakeTemplateRenderer(err=cause, fail_on=1),
        rollback_on_failure=True,
    )

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    assert exc_info.value.cause is cause


@pytest.mark.asyncio
async def test_create_timeout_is_internal_error(user, resource, member_gate) -> None:
    ops = _ops(gate=member_gate, cluster=FakeClusterGateway(delay=1.0), timeout=0.01)

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    assert isinstance(exc_info.value.cause, TimeoutError)


@pytest.mark.asyncio
async def test_create_slow_template_read_hits_deadline(user, resource, member_gate) -> None:
    templates = FakeTemplateSource(read_delay=0.5)
    cluster = FakeClusterGateway()
    ops = _ops(
        gate=member_gate,
        templates=templates,
        renderer=JinjaTemplateRenderer(),
        cluster=cluster,
        timeout=0.05,
    )
    loop = asyncio.get_running_loop()
    started = loop.time()

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    assert loop.time() - started < 0.4
    assert isinstance(exc_info.value.cause, TimeoutError)
    assert cluster.applied == []
    assert all(s.closed for s in templates.opened)


@pytest.mark.asyncio
async def test_create_authorization_failure_is_internal_error(user, resource) -> None:
    cause = RuntimeError("registry down")
    ops = _ops(gate=FakeAuthorizationGate(err=cause))

    with pytest.raises(InternalServerError) as exc_info:
        await ops.create(user, resource)

    assert exc_info.value.cause is cause


@pytest.mark.asyncio
async def test_concurrent_creates_with_distinct_names(user, resource, member_gate) -> None:
    cluster = FakeClusterGateway()
    ops = _ops(gate=member_gate, cluster=cluster)
    other = type(resource)(name="other", team_name=resource.team_name, settings=resource.settings)

    await asyncio.gather(ops.create(user, resource), ops.create(user, other))

    assert sorted(ns for ns, _, _ in cluster.created_namespaces) == ["other", "teresa"]


@pytest.mark.asyncio
async def test_delete_success(user, member_gate) -> None:
    cluster = FakeClusterGateway()
    ops = _ops(gate=member_gate, cluster=cluster)

    assert await ops.delete(user, "test") is None
    assert cluster.deleted == ["test"]


@pytest.mark.asyncio
async def test_delete_permission_denied(member_gate) -> None:
    cluster = FakeClusterGateway()
    ops = _ops(gate=member_gate, cluster=cluster)

    with pytest.raises(PermissionDenied):
        await ops.delete(Principal(subject="bad-user@luizalabs.com"), "test")

    assert cluster.deleted == []


@pytest.mark.asyncio
async def test_delete_not_found(user, member_gate) -> None:
    cluster = FakeClusterGateway(delete_namespace_err=RuntimeError("test"), is_not_found_err=True)
    ops = _ops(gate=member_gate, cluster=cluster)

    with pytest.raises(NotFound) as exc_info:
        await ops.delete(user, "test")

    assert type(exc_info.value) is NotFound


@pytest.mark.asyncio
async def test_delete_internal_server_error(user, member_gate) -> None:
    cause = RuntimeError("test")
    ops = _ops(gate=member_gate, cluster=FakeClusterGateway(delete_namespace_err=cause))

    with pytest.raises(InternalServerError) as exc_info:
        await ops.delete(user, "test")

    assert error_code(exc_info.value) == "internal_server_error"
    assert exc_info.value.cause is cause
