"""Ingress validator.

Walks Ingress -> Service -> Pods for every path of every rule. Both the
networking.k8s.io/v1 backend shape (``backend.service.name/port``) and the
legacy extensions/v1beta1 shape (``backend.serviceName/servicePort``) are
understood. Paths whose backend is not a Service are skipped.
"""

from __future__ import annotations

from typing import Any

from kubecleanup.accessor.base import AccessorError, Resource, ResourceAccessor
from kubecleanup.models.resources import ResourceReference, SubjectKind
from kubecleanup.models.violations import Violation
from kubecleanup.observability.logging import get_logger
from kubecleanup.validators.base import namespace_of, spec_of, violation_for
from kubecleanup.validators.walker import walk_selector_to_pods

_log = get_logger("validators.ingress")

REASON_NO_HTTP_ROUTES = "no HTTP routes in ingress"
REASON_MISSING_SERVICE = "references a missing service"


def _service_backend(backend: dict[str, Any]) -> tuple[str, int | str | None] | None:
    """Return (service name, port) for a service backend, else None."""
    service = backend.get("service")
    if service:
        port = service.get("port") or {}
        return str(service.get("name", "")), port.get("number", port.get("name"))
    if "serviceName" in backend:
        return str(backend["serviceName"]), backend.get("servicePort")
    return None


def _exposes_port(service: Resource, port: int | str | None) -> bool:
    # Numeric match only; a backend that names its port never matches.
    if not isinstance(port, int) or isinstance(port, bool):
        return False
    return any(p.get("port") == port for p in spec_of(service).get("ports") or [])


async def validate_ingress(ingress: Resource, accessor: ResourceAccessor) -> list[Violation]:
    """Return every broken route of *ingress*, in rule/path order."""
    found: list[Violation] = []
    for rule in spec_of(ingress).get("rules") or []:
        paths = (rule.get("http") or {}).get("paths") or []
        if not paths:
            found.append(violation_for(SubjectKind.INGRESS, ingress, REASON_NO_HTTP_ROUTES))
            continue
        for path in paths:
            violation = await _check_path(ingress, path.get("backend") or {}, accessor)
            if violation is not None:
                found.append(violation)
    return found


async def _check_path(
    ingress: Resource,
    backend: dict[str, Any],
    accessor: ResourceAccessor,
) -> Violation | None:
    target = _service_backend(backend)
    if target is None:
        return None
    service_name, port = target
    namespace = namespace_of(ingress)
    reference = ResourceReference.service(service_name)

    try:
        service = await accessor.get_service(namespace, service_name)
        detail = ""
    except AccessorError as exc:
        service, detail = None, str(exc)
    if service is None:
        _log.debug("ingress backend service missing", namespace=namespace, service=service_name)
        return violation_for(SubjectKind.INGRESS, ingress, REASON_MISSING_SERVICE, reference, detail)

    if not _exposes_port(service, port):
        return violation_for(
            SubjectKind.INGRESS,
            ingress,
            f"service doesn't expose ingress port {port if port is not None else 0}",
            reference,
        )

    broken = await walk_selector_to_pods(accessor, namespace, spec_of(service).get("selector"))
    if broken is None:
        return None
    return violation_for(SubjectKind.INGRESS, ingress, broken.reason, broken.reference, broken.detail)
