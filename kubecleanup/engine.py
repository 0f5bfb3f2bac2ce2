"""Validation entry points.

One coroutine per resource kind. Each lists the top-level collection,
validates every item sequentially and returns the completed
ViolationInventory. A failure to list the collection itself is fatal and
propagates as AccessorError; dependency lookup failures never escape a
validator.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Iterable
from enum import StrEnum

from kubecleanup.accessor.base import Resource, ResourceAccessor
from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import Violation, ViolationInventory
from kubecleanup.observability.logging import get_logger
from kubecleanup.observability.metrics import resources_examined_total, violations_total
from kubecleanup.validators import (
    validate_deployment,
    validate_ingress,
    validate_namespace,
    validate_pod_ownership,
    validate_service,
)
from kubecleanup.validators.base import name_of
from kubecleanup.validators.pods import DEFAULT_SYSTEM_NAMESPACE

_log = get_logger("engine")


class Check(StrEnum):
    """Selectable validation passes, in default run order."""

    NAMESPACES = "namespaces"
    INGRESSES = "ingresses"
    SERVICES = "services"
    DEPLOYMENTS = "deployments"
    PODS = "pods"


async def _fold(
    kind: SubjectKind,
    resources: list[Resource],
    validate: Callable[[Resource], Awaitable[list[Violation]]],
) -> ViolationInventory:
    t_start = time.monotonic()
    _log.info("examining resources", kind=kind.value, count=len(resources))
    found: list[Violation] = []
    for resource in resources:
        resources_examined_total.labels(kind=kind.value).inc()
        violations = await validate(resource)
        for violation in violations:
            violations_total.labels(subject_kind=violation.subject_kind.value).inc()
        found.extend(violations)
    _log.info(
        "finished examining resources",
        kind=kind.value,
        violations=len(found),
        duration_ms=round((time.monotonic() - t_start) * 1000.0, 1),
    )
    return ViolationInventory(found)


async def validate_namespaces(accessor: ResourceAccessor, namespace: str | None = None) -> ViolationInventory:
    namespaces = await accessor.list_namespaces()
    if namespace:
        namespaces = [ns for ns in namespaces if name_of(ns) == namespace]

    async def _validate(ns: Resource) -> list[Violation]:
        return validate_namespace(ns)

    return await _fold(SubjectKind.NAMESPACE, namespaces, _validate)


async def validate_ingresses(accessor: ResourceAccessor, namespace: str | None = None) -> ViolationInventory:
    ingresses = await accessor.list_ingresses(namespace)
    return await _fold(SubjectKind.INGRESS, ingresses, lambda ing: validate_ingress(ing, accessor))


async def validate_services(accessor: ResourceAccessor, namespace: str | None = None) -> ViolationInventory:
    services = await accessor.list_services(namespace)
    return await _fold(SubjectKind.SERVICE, services, lambda svc: validate_service(svc, accessor))


async def validate_deployments(accessor: ResourceAccessor, namespace: str | None = None) -> ViolationInventory:
    deployments = await accessor.list_deployments(namespace)

    async def _validate(deployment: Resource) -> list[Violation]:
        return validate_deployment(deployment)

    return await _fold(SubjectKind.DEPLOYMENT, deployments, _validate)


async def validate_pods(
    accessor: ResourceAccessor,
    namespace: str | None = None,
    system_namespace: str = DEFAULT_SYSTEM_NAMESPACE,
) -> ViolationInventory:
    pods = await accessor.list_pods(namespace)
    return await _fold(
        SubjectKind.POD,
        pods,
        lambda pod: validate_pod_ownership(pod, accessor, system_namespace=system_namespace),
    )


async def run_checks(
    accessor: ResourceAccessor,
    checks: Iterable[Check] = tuple(Check),
    namespace: str | None = None,
    system_namespace: str = DEFAULT_SYSTEM_NAMESPACE,
) -> ViolationInventory:
    """Run the selected passes in canonical order and merge their inventories."""
    selected = set(checks)
    inventory = ViolationInventory()
    for check in Check:
        if check not in selected:
            continue
        if check is Check.NAMESPACES:
            result = await validate_namespaces(accessor, namespace)
        elif check is Check.INGRESSES:
            result = await validate_ingresses(accessor, namespace)
        elif check is Check.SERVICES:
            result = await validate_services(accessor, namespace)
        elif check is Check.DEPLOYMENTS:
            result = await validate_deployments(accessor, namespace)
        else:
            result = await validate_pods(accessor, namespace, system_namespace)
        inventory = inventory.merge(result)
    return inventory
