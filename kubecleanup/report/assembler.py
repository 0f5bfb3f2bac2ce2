"""Flatten a ViolationInventory into namespace-grouped reports."""

from __future__ import annotations

from kubecleanup.models.violations import NamespaceReport, ViolationInventory


def assemble(inventory: ViolationInventory, retain_all: bool = True) -> list[NamespaceReport]:
    """Group violations by namespace, namespaces sorted by name.

    With ``retain_all=False`` only the last violation recorded for each
    (namespace, subject) is kept, positioned where that subject was first
    seen.
    """
    if retain_all:
        return [
            NamespaceReport(name=ns, violations=inventory.for_namespace(ns))
            for ns in sorted(inventory.namespaces())
        ]
    latest = inventory.latest()
    return [NamespaceReport(name=ns, violations=list(latest[ns].values())) for ns in sorted(latest)]
