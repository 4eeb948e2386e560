"""
resource_orchestrator.resources.models

Resource domain objects and the inbound wire model they are built from.

Responsibilities:
- Define `Resource`/`Setting` (ephemeral, one per create request).
- Define the `CreateRequest` wire model validated by the API layer.
- Map a request into a `Resource` 1:1, preserving setting order and duplicates.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True, slots=True)
class Setting:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Resource:
    """
    A team-scoped, templated add-on instantiated as a cluster namespace.
    `name` doubles as the namespace name.
    """

    name: str
    team_name: str
    settings: tuple[Setting, ...] = ()


@dataclass(frozen=True, slots=True)
class RenderedResource:
    name: str
    namespace: str
    # Rendered welcome/onboarding text, suitable for display to the caller.
    text: str


class CreateRequestSetting(BaseModel):
    key: str
    value: str = ""


class CreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=63)
    team_name: str = Field(min_length=1, max_length=128)
    settings: list[CreateRequestSetting] = Field(default_factory=list)


def new_resource(req: CreateRequest) -> Resource:
    return Resource(
        name=req.name,
        team_name=req.team_name,
        settings=tuple(Setting(key=s.key, value=s.value) for s in req.settings),
    )


# --- Module Notes -----------------------------------------------------------
# No uniqueness is enforced on setting keys here; the renderer decides how duplicates merge.
