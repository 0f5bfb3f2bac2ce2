"""Helpers shared by the validators for reading raw resource dicts."""

from __future__ import annotations

from typing import Any

from kubecleanup.accessor.base import Resource
from kubecleanup.models.resources import ResourceReference, SubjectKind
from kubecleanup.models.violations import Violation


def metadata(resource: Resource) -> dict[str, Any]:
    return resource.get("metadata") or {}


def name_of(resource: Resource) -> str:
    return str(metadata(resource).get("name", ""))


def namespace_of(resource: Resource) -> str:
    return str(metadata(resource).get("namespace", ""))


def spec_of(resource: Resource) -> dict[str, Any]:
    return resource.get("spec") or {}


def status_of(resource: Resource) -> dict[str, Any]:
    return resource.get("status") or {}


def status_count(resource: Resource, key: str) -> int:
    """Read an integer status counter; the API server omits zero values."""
    return int(status_of(resource).get(key) or 0)


def format_selector(selector: dict[str, str] | None) -> str:
    """Serialise an equality selector as ``k1=v1,k2=v2`` with keys sorted."""
    if not selector:
        return ""
    return ",".join(f"{key}={selector[key]}" for key in sorted(selector))


def violation_for(
    kind: SubjectKind,
    resource: Resource,
    reason: str,
    reference: ResourceReference | None = None,
    detail: str = "",
) -> Violation:
    """Build a Violation whose subject is *resource*."""
    # Namespaces are cluster-scoped; report them under their own name.
    namespace = name_of(resource) if kind is SubjectKind.NAMESPACE else namespace_of(resource)
    return Violation(
        subject_kind=kind,
        subject_name=name_of(resource),
        namespace=namespace,
        reason=reason,
        reference=reference,
        detail=detail,
    )
