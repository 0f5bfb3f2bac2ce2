"""Pod ownership validator: pods whose controlling chain is gone."""

from __future__ import annotations

from kubecleanup.accessor.base import Resource, ResourceAccessor
from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import Violation
from kubecleanup.validators.base import metadata, namespace_of, violation_for
from kubecleanup.validators.walker import walk_owner_chain

REASON_NOT_OWNED = "pod is not owned by anyone"

DEFAULT_SYSTEM_NAMESPACE = "kube-system"


async def validate_pod_ownership(
    pod: Resource,
    accessor: ResourceAccessor,
    system_namespace: str = DEFAULT_SYSTEM_NAMESPACE,
) -> list[Violation]:
    if namespace_of(pod) == system_namespace:
        return []

    owners = metadata(pod).get("ownerReferences") or []
    if not owners:
        return [violation_for(SubjectKind.POD, pod, REASON_NOT_OWNED)]

    broken = await walk_owner_chain(accessor, namespace_of(pod), owners)
    return [violation_for(SubjectKind.POD, pod, link.reason, link.reference, link.detail) for link in broken]
