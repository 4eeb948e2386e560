"""
resource_orchestrator.api.routers.resources

Resource lifecycle endpoints.

Responsibilities:
- Provision a resource namespace from a create request.
- Tear a resource namespace down by name.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from resource_orchestrator.api.deps import resource_operations
from resource_orchestrator.auth.deps import get_principal
from resource_orchestrator.auth.models import Principal
from resource_orchestrator.resources.models import CreateRequest, new_resource
from resource_orchestrator.services.resource_operations import ResourceOperations

router = APIRouter(prefix="/v1/resources", tags=["resources"])


class CreateResponse(BaseModel):
    name: str
    namespace: str
    text: str


@router.post("", response_model=CreateResponse, status_code=HTTP_201_CREATED)
async def create_resource(
    body: CreateRequest,
    principal: Principal = Depends(get_principal),
    ops: ResourceOperations = Depends(resource_operations),
) -> CreateResponse:
    # Errors are translated to HTTP by `api.errors`.
    rendered = await ops.create(principal, new_resource(body))
    return CreateResponse(name=rendered.name, namespace=rendered.namespace, text=rendered.text)


@router.delete("/{name}", status_code=HTTP_204_NO_CONTENT)
async def delete_resource(
    name: str,
    principal: Principal = Depends(get_principal),
    ops: ResourceOperations = Depends(resource_operations),
) -> Response:
    await ops.delete(principal, name)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Team membership is enforced inside ResourceOperations, so these routes only require a
# valid bearer token.
