"""Service validator.

Branches are checked in order and the first one that applies decides the
outcome for the service:

1. no selector (and not ExternalName)
2. LoadBalancer: is an ingress point provisioned?
3. ExternalName: is the alias a domain name rather than an IP?
4. selector matches at least one pod
"""

from __future__ import annotations

import ipaddress
import re

from kubecleanup.accessor.base import Resource, ResourceAccessor
from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import Violation
from kubecleanup.validators.base import name_of, namespace_of, spec_of, status_of, violation_for
from kubecleanup.validators.walker import walk_selector_to_pods

REASON_NO_SELECTOR = "no selector"
REASON_LB_PENDING = "LoadBalancer service in pending state"

_TYPE_LOAD_BALANCER = "LoadBalancer"
_TYPE_EXTERNAL_NAME = "ExternalName"

_RE_DNS_LABEL = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$", re.IGNORECASE)


def is_bootstrap_service(service: Resource) -> bool:
    """The API server's own ``default/kubernetes`` service."""
    return namespace_of(service) == "default" and name_of(service) == "kubernetes"


def is_valid_cname(value: str) -> bool:
    """Return True if *value* is a DNS domain name and not a literal IP address."""
    candidate = value.strip()
    if not candidate:
        return False
    try:
        ipaddress.ip_address(candidate.strip("[]"))
        return False
    except ValueError:
        pass
    if candidate.endswith("."):
        candidate = candidate[:-1]
    if not candidate or len(candidate) > 253:
        return False
    labels = candidate.split(".")
    if not all(_RE_DNS_LABEL.match(label) for label in labels):
        return False
    # An all-numeric top-level label (e.g. "10.0.0.300") is not a domain.
    return not labels[-1].isdigit()


async def validate_service(service: Resource, accessor: ResourceAccessor) -> list[Violation]:
    """Return zero or one violation for *service*."""
    if is_bootstrap_service(service):
        return []

    spec = spec_of(service)
    svc_type = spec.get("type") or "ClusterIP"
    selector = spec.get("selector") or {}

    if not selector and svc_type != _TYPE_EXTERNAL_NAME:
        return [violation_for(SubjectKind.SERVICE, service, REASON_NO_SELECTOR)]

    if svc_type == _TYPE_LOAD_BALANCER:
        if not (status_of(service).get("loadBalancer") or {}).get("ingress"):
            return [violation_for(SubjectKind.SERVICE, service, REASON_LB_PENDING)]
        return []

    if svc_type == _TYPE_EXTERNAL_NAME:
        external_name = str(spec.get("externalName") or "")
        if not is_valid_cname(external_name):
            return [violation_for(SubjectKind.SERVICE, service, f"{external_name} is not a valid CNAME")]
        return []

    broken = await walk_selector_to_pods(accessor, namespace_of(service), selector)
    if broken is None:
        return []
    return [violation_for(SubjectKind.SERVICE, service, broken.reason, broken.reference, broken.detail)]
