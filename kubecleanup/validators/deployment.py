"""Deployment validator. Needs nothing beyond the deployment itself."""

from __future__ import annotations

from kubecleanup.accessor.base import Resource
from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import Violation
from kubecleanup.validators.base import metadata, status_count, status_of, violation_for

REASON_SCALED_DOWN = "deployment scaled down to 0 replicas"
REASON_NO_LABELS = "no labels on deployment"
REASON_MIN_REPLICAS = "minimum replicas unavailable, could be temporary"
REASON_NO_READY = "no replicas are ready"


def _condition(deployment: Resource, cond_type: str) -> dict | None:
    for cond in status_of(deployment).get("conditions") or []:
        if cond.get("type") == cond_type:
            return cond
    return None


def _condition_failed(deployment: Resource, cond_type: str, reason: str) -> dict | None:
    cond = _condition(deployment, cond_type)
    if cond is not None and cond.get("status") == "False" and cond.get("reason") == reason:
        return cond
    return None


def validate_deployment(deployment: Resource) -> list[Violation]:
    """Run every deployment check; findings come back in check order."""
    reasons: list[str] = []

    if status_count(deployment, "replicas") == 0:
        reasons.append(REASON_SCALED_DOWN)

    if not metadata(deployment).get("labels"):
        reasons.append(REASON_NO_LABELS)

    if _condition_failed(deployment, "Available", "MinimumReplicasUnavailable") is not None:
        reasons.append(REASON_MIN_REPLICAS)

    # A genuine stall: surface the controller's own message.
    stalled = _condition_failed(deployment, "Progressing", "ProgressDeadlineExceeded")
    if stalled is not None:
        reasons.append(str(stalled.get("message") or "ProgressDeadlineExceeded"))

    if status_count(deployment, "readyReplicas") == 0:
        reasons.append(REASON_NO_READY)

    return [violation_for(SubjectKind.DEPLOYMENT, deployment, reason) for reason in reasons]
