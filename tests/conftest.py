from __future__ import annotations

import pytest

from resource_orchestrator.auth.models import Principal
from resource_orchestrator.resources.models import Resource, Setting
from tests.fakes import FakeAuthorizationGate

TEAM_NAME = "luizalabs"
USER_EMAIL = "gopher@luizalabs.com"


@pytest.fixture
def user() -> Principal:
    return Principal(subject=USER_EMAIL)


@pytest.fixture
def resource() -> Resource:
    return Resource(
        name="teresa",
        team_name=TEAM_NAME,
        settings=(Setting(key="key1", value="value1"), Setting(key="key2", value="value2")),
    )


@pytest.fixture
def member_gate() -> FakeAuthorizationGate:
    # USER_EMAIL is a member of TEAM_NAME.
    return FakeAuthorizationGate(members={TEAM_NAME: {USER_EMAIL}})
