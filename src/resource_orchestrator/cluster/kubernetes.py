"""
resource_orchestrator.cluster.kubernetes

Kubernetes implementation of the cluster gateway.

Responsibilities:
- Create/delete namespaces labelled with their owning team (and annotated with the user).
- Apply rendered multi-document YAML manifests into a namespace.
- Translate `ApiException`/`FailToCreateError` into `ClusterError` so callers never see
  kubernetes client types.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, BinaryIO, TypeVar

import yaml
from kubernetes import client, config, utils
from kubernetes.client.rest import ApiException

from resource_orchestrator.cluster.errors import (
    ClusterError,
    ClusterErrorReason,
    is_already_exists,
    is_not_found,
)
from resource_orchestrator.settings import Settings

T = TypeVar("T")

MANAGED_BY = "resource-orchestrator"


class KubernetesGateway:
    """
    The kubernetes client is synchronous; every call runs in a worker thread so the
    event loop keeps serving other requests.
    """

    def __init__(
        self,
        *,
        api_client: client.ApiClient,
        label_prefix: str,
        core_api: client.CoreV1Api | None = None,
    ) -> None:
        self._api_client = api_client
        self._core = core_api or client.CoreV1Api(api_client)
        self._team_label = f"{label_prefix}/team"
        self._user_annotation = f"{label_prefix}/last-user"

    async def create_namespace_from_name(
        self, namespace: str, team_name: str, user_email: str
    ) -> None:
        body = client.V1Namespace(
            metadata=client.V1ObjectMeta(
                name=namespace,
                labels={
                    "app.kubernetes.io/managed-by": MANAGED_BY,
                    self._team_label: team_name,
                },
                # Emails are not valid label values.
                annotations={self._user_annotation: user_email},
            )
        )
        await self._run(self._core.create_namespace, body=body)

    async def create(self, namespace: str, manifest: BinaryIO) -> None:
        try:
            docs = [d for d in yaml.safe_load_all(manifest) if d]
        except yaml.YAMLError as e:
            raise ClusterError(ClusterErrorReason.invalid, f"invalid manifest: {e}") from e

        for doc in docs:
            await self._run(utils.create_from_dict, self._api_client, doc, namespace=namespace)

    async def delete_namespace(self, namespace: str) -> None:
        await self._run(self._core.delete_namespace, name=namespace)

    async def namespace_team(self, namespace: str) -> str | None:
        ns = await self._run(self._core.read_namespace, name=namespace)
        labels = (ns.metadata.labels if ns.metadata else None) or {}
        return labels.get(self._team_label)

    def is_already_exists(self, err: BaseException) -> bool:
        return is_already_exists(err)

    def is_not_found(self, err: BaseException) -> bool:
        return is_not_found(err)

    async def _run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except ApiException as e:
            raise _from_api_exception(e) from e
        except utils.FailToCreateError as e:
            first = e.api_exceptions[0] if e.api_exceptions else None
            if first is None:
                raise ClusterError(ClusterErrorReason.unknown, str(e)) from e
            raise _from_api_exception(first) from e


def _from_api_exception(e: ApiException) -> ClusterError:
    if e.status == 409:
        reason = ClusterErrorReason.already_exists
    elif e.status == 404:
        reason = ClusterErrorReason.not_found
    elif e.status == 422:
        reason = ClusterErrorReason.invalid
    else:
        reason = ClusterErrorReason.unknown
    return ClusterError(reason, f"{e.status} {e.reason}", status=e.status)


def build_gateway(settings: Settings) -> KubernetesGateway:
    if settings.kube_in_cluster:
        cfg = client.Configuration()
        config.load_incluster_config(client_configuration=cfg)
        api_client = client.ApiClient(configuration=cfg)
    else:
        api_client = config.new_client_from_config(
            config_file=settings.kubeconfig,
            context=settings.kube_context,
        )
    return KubernetesGateway(api_client=api_client, label_prefix=settings.namespace_label_prefix)


# --- Module Notes -----------------------------------------------------------
# The host process needs cluster-wide rights to create/delete namespaces and apply arbitrary
# manifests; granting them is a deployment concern, not handled here.
