"""Traversal of the fixed dependency chains.

Two chains are walked, both hand-coded because their depth never varies:

    Service selector -> Pods              (used by Ingress and Service checks)
    Pod -> ReplicaSet -> Deployment       (used by the pod ownership check)

Each walk returns the broken links it found. A link is broken when the
target is missing or its lookup failed; both outcomes are folded together
so a transport error never aborts the run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from kubecleanup.accessor.base import AccessorError, Resource, ResourceAccessor
from kubecleanup.models.resources import ReferenceKind, ResourceReference
from kubecleanup.observability.logging import get_logger
from kubecleanup.validators.base import format_selector, metadata

_log = get_logger("validators.walker")

REASON_NO_WORKLOADS = "backing service references no workloads"
REASON_NO_PODS = "backing workload contains no pods"
REASON_OWNER_MISSING = "owner is missing"
REASON_OWNER_OF_OWNER_MISSING = "owner of the owner is missing"

# Owner kinds the ownership chain knows how to follow.
_OWNER_KINDS = {
    "ReplicaSet": ReferenceKind.REPLICA_SET,
    "Deployment": ReferenceKind.DEPLOYMENT,
}


@dataclass(frozen=True)
class BrokenLink:
    """A dependency edge that could not be resolved."""

    reason: str
    reference: ResourceReference | None = None
    detail: str = ""


async def walk_selector_to_pods(
    accessor: ResourceAccessor,
    namespace: str,
    selector: dict[str, str] | None,
) -> BrokenLink | None:
    """Check that *selector* matches at least one pod in *namespace*."""
    label_selector = format_selector(selector)
    reference = ResourceReference.pods(label_selector)
    try:
        pods = await accessor.list_pods(namespace, label_selector)
    except AccessorError as exc:
        _log.debug("pod lookup failed", namespace=namespace, selector=label_selector, error=str(exc))
        return BrokenLink(REASON_NO_WORKLOADS, reference, detail=str(exc))
    if not pods:
        return BrokenLink(REASON_NO_PODS, reference)
    return None


async def walk_owner_chain(
    accessor: ResourceAccessor,
    namespace: str,
    owner_references: list[dict[str, str]],
) -> list[BrokenLink]:
    """Follow Pod -> ReplicaSet -> Deployment for every ReplicaSet owner."""
    broken: list[BrokenLink] = []
    for owner in owner_references:
        if _OWNER_KINDS.get(owner.get("kind", "")) is not ReferenceKind.REPLICA_SET:
            continue
        rs_name = owner.get("name", "")
        replica_set, detail = await _lookup(accessor.get_replica_set, namespace, rs_name)
        if replica_set is None:
            broken.append(BrokenLink(REASON_OWNER_MISSING, ResourceReference.replica_set(rs_name), detail))
            continue
        broken.extend(await _walk_replica_set_owners(accessor, namespace, replica_set))
    return broken


async def _walk_replica_set_owners(
    accessor: ResourceAccessor,
    namespace: str,
    replica_set: Resource,
) -> list[BrokenLink]:
    broken: list[BrokenLink] = []
    for owner in metadata(replica_set).get("ownerReferences") or []:
        if _OWNER_KINDS.get(owner.get("kind", "")) is not ReferenceKind.DEPLOYMENT:
            continue
        deploy_name = owner.get("name", "")
        deployment, detail = await _lookup(accessor.get_deployment, namespace, deploy_name)
        if deployment is None:
            broken.append(
                BrokenLink(REASON_OWNER_OF_OWNER_MISSING, ResourceReference.deployment(deploy_name), detail)
            )
    return broken


async def _lookup(
    get: Callable[[str, str], Awaitable[Resource | None]],
    namespace: str,
    name: str,
) -> tuple[Resource | None, str]:
    """Run a get call; return (resource, error text). Errors yield (None, text)."""
    try:
        return await get(namespace, name), ""
    except AccessorError as exc:
        _log.debug("owner lookup failed", namespace=namespace, name=name, error=str(exc))
        return None, str(exc)
