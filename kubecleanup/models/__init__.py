"""Core data structures for kube-cleanup."""

from kubecleanup.models.config import KubeCleanupConfig
from kubecleanup.models.resources import ReferenceKind, ResourceReference, SubjectKind
from kubecleanup.models.violations import NamespaceReport, Violation, ViolationInventory

__all__ = [
    "KubeCleanupConfig",
    "NamespaceReport",
    "ReferenceKind",
    "ResourceReference",
    "SubjectKind",
    "Violation",
    "ViolationInventory",
]
