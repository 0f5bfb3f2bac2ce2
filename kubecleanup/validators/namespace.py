"""Namespace validator: namespaces wedged in termination."""

from __future__ import annotations

from kubecleanup.accessor.base import Resource
from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import Violation
from kubecleanup.validators.base import spec_of, status_of, violation_for

CONTROL_PLANE_FINALIZER = "kubernetes"

REASON_STUCK_TERMINATING = "stuck in termination"


def validate_namespace(namespace: Resource) -> list[Violation]:
    """Flag a Terminating namespace that still carries the core finalizer."""
    if status_of(namespace).get("phase") != "Terminating":
        return []
    if CONTROL_PLANE_FINALIZER not in (spec_of(namespace).get("finalizers") or []):
        return []
    return [violation_for(SubjectKind.NAMESPACE, namespace, REASON_STUCK_TERMINATING)]
