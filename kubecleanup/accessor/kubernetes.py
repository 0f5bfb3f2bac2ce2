"""ResourceAccessor backed by kubernetes-asyncio.

``connect()`` resolves credentials (kubeconfig first, in-cluster service
account as the fallback) into a dedicated ApiClient; ``KubernetesAccessor``
wraps the typed API groups and hands back sanitized dicts.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp
from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from kubecleanup.accessor.base import AccessorError, Resource
from kubecleanup.models.config import ClusterConfig
from kubecleanup.observability.logging import get_logger

_log = get_logger("accessor.kubernetes")


async def connect(cluster: ClusterConfig) -> k8s_client.ApiClient:
    """Build an ApiClient for the configured cluster.

    Raises AccessorError when neither kubeconfig nor in-cluster
    configuration can be loaded.
    """
    configuration = k8s_client.Configuration()
    if cluster.in_cluster:
        _load_in_cluster(configuration)
    else:
        try:
            await k8s_config.load_kube_config(
                config_file=cluster.kubeconfig_path or None,
                context=cluster.context or None,
                client_configuration=configuration,
            )
            _log.info("configured to run in out-of-cluster mode", kubeconfig=cluster.kubeconfig_path)
        except (k8s_config.ConfigException, OSError) as exc:
            _log.info("local configuration not found, trying in-cluster configuration", error=str(exc))
            _load_in_cluster(configuration)
    return k8s_client.ApiClient(configuration=configuration)


def _load_in_cluster(configuration: k8s_client.Configuration) -> None:
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
    except k8s_config.ConfigException as exc:
        raise AccessorError("load cluster configuration", str(exc)) from exc
    _log.info("configured to run in in-cluster mode")


class KubernetesAccessor:
    """Read-only accessor over CoreV1, AppsV1 and NetworkingV1.

    Args:
        api_client:      Connected ApiClient (see ``connect``).
        request_timeout: Per-request timeout in seconds, applied to every call.
    """

    def __init__(self, api_client: k8s_client.ApiClient, request_timeout: float = 30.0) -> None:
        self._api_client = api_client
        self._timeout = request_timeout
        self._core = k8s_client.CoreV1Api(api_client)
        self._apps = k8s_client.AppsV1Api(api_client)
        self._networking = k8s_client.NetworkingV1Api(api_client)

    async def close(self) -> None:
        await self._api_client.close()

    # ------------------------------------------------------------------
    # ResourceAccessor
    # ------------------------------------------------------------------

    async def list_namespaces(self) -> list[Resource]:
        return await self._list("list namespaces", self._core.list_namespace)

    async def list_ingresses(self, namespace: str | None = None) -> list[Resource]:
        if namespace:
            return await self._list("list ingresses", self._networking.list_namespaced_ingress, namespace)
        return await self._list("list ingresses", self._networking.list_ingress_for_all_namespaces)

    async def list_services(self, namespace: str | None = None) -> list[Resource]:
        if namespace:
            return await self._list("list services", self._core.list_namespaced_service, namespace)
        return await self._list("list services", self._core.list_service_for_all_namespaces)

    async def get_service(self, namespace: str, name: str) -> Resource | None:
        return await self._get(f"get service {namespace}/{name}", self._core.read_namespaced_service, name, namespace)

    async def list_pods(
        self,
        namespace: str | None = None,
        label_selector: str | None = None,
    ) -> list[Resource]:
        kwargs: dict[str, Any] = {}
        if label_selector:
            kwargs["label_selector"] = label_selector
        if namespace:
            return await self._list("list pods", self._core.list_namespaced_pod, namespace, **kwargs)
        return await self._list("list pods", self._core.list_pod_for_all_namespaces, **kwargs)

    async def get_replica_set(self, namespace: str, name: str) -> Resource | None:
        return await self._get(
            f"get replicaset {namespace}/{name}", self._apps.read_namespaced_replica_set, name, namespace
        )

    async def get_deployment(self, namespace: str, name: str) -> Resource | None:
        return await self._get(
            f"get deployment {namespace}/{name}", self._apps.read_namespaced_deployment, name, namespace
        )

    async def list_deployments(self, namespace: str | None = None) -> list[Resource]:
        if namespace:
            return await self._list("list deployments", self._apps.list_namespaced_deployment, namespace)
        return await self._list("list deployments", self._apps.list_deployment_for_all_namespaces)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _call(self, operation: str, fn: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        try:
            return await fn(*args, _request_timeout=self._timeout, **kwargs)
        except ApiException as exc:
            raise AccessorError(operation, f"{exc.status} {exc.reason}", status=exc.status) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise AccessorError(operation, str(exc) or type(exc).__name__) from exc

    async def _list(
        self, operation: str, fn: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> list[Resource]:
        result = await self._call(operation, fn, *args, **kwargs)
        items = [self._api_client.sanitize_for_serialization(item) for item in result.items]
        _log.debug("listed resources", operation=operation, count=len(items))
        return items

    async def _get(
        self, operation: str, fn: Callable[..., Awaitable[Any]], name: str, namespace: str
    ) -> Resource | None:
        try:
            obj = await self._call(operation, fn, name, namespace)
        except AccessorError as exc:
            if exc.status == 404:
                return None
            raise
        return self._api_client.sanitize_for_serialization(obj)
