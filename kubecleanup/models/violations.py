"""Violation and inventory data structures.

A Violation is one finding about one subject resource. Validators return
lists of them; the engine folds those lists into a ViolationInventory,
which is never mutated after construction. Merging two inventories yields
a new one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from kubecleanup.models.resources import ResourceReference, SubjectKind

SubjectKey = tuple[SubjectKind, str]


@dataclass(frozen=True)
class Violation:
    """A recorded finding that a resource's declared dependency is broken."""

    subject_kind: SubjectKind
    subject_name: str
    namespace: str
    reason: str
    reference: ResourceReference | None = None
    detail: str = ""  # accessor error text when a lookup failed in transport

    @property
    def subject(self) -> SubjectKey:
        return (self.subject_kind, self.subject_name)

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "kind": self.subject_kind.value,
            "name": self.subject_name,
            "namespace": self.namespace,
            "reason": self.reason,
        }
        if self.reference is not None:
            out["reference"] = self.reference.to_dict()
        if self.detail:
            out["detail"] = self.detail
        return out


class ViolationInventory:
    """Violations of one validation run, grouped by namespace and subject.

    Every distinct violation is retained in evaluation order; an exact
    duplicate of one already held (same subject, reason and reference) is
    dropped, so two rules failing the same way yield one finding.
    ``latest()`` gives the legacy view where a later finding for the same
    (namespace, subject) replaces an earlier one.
    """

    __slots__ = ("_violations",)

    def __init__(self, violations: Iterable[Violation] = ()) -> None:
        self._violations: tuple[Violation, ...] = tuple(dict.fromkeys(violations))

    def merge(self, other: ViolationInventory) -> ViolationInventory:
        """Return a new inventory holding this one's violations, then *other*'s new ones."""
        return ViolationInventory(self._violations + other._violations)

    def violations(self) -> list[Violation]:
        return list(self._violations)

    def namespaces(self) -> list[str]:
        """Namespaces with at least one violation, in first-seen order."""
        return list(dict.fromkeys(v.namespace for v in self._violations))

    def for_namespace(self, namespace: str) -> list[Violation]:
        return [v for v in self._violations if v.namespace == namespace]

    def for_subject(self, namespace: str, kind: SubjectKind, name: str) -> list[Violation]:
        return [v for v in self._violations if v.namespace == namespace and v.subject == (kind, name)]

    def latest(self) -> dict[str, dict[SubjectKey, Violation]]:
        """Return at most one violation per (namespace, subject): the last recorded."""
        out: dict[str, dict[SubjectKey, Violation]] = {}
        for v in self._violations:
            out.setdefault(v.namespace, {})[v.subject] = v
        return out

    def __iter__(self) -> Iterator[Violation]:
        return iter(self._violations)

    def __len__(self) -> int:
        return len(self._violations)

    def __bool__(self) -> bool:
        return bool(self._violations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViolationInventory):
            return NotImplemented
        return self._violations == other._violations

    def __hash__(self) -> int:
        return hash(self._violations)

    def __repr__(self) -> str:
        return f"ViolationInventory({len(self._violations)} violations in {len(self.namespaces())} namespaces)"


@dataclass
class NamespaceReport:
    """A namespace and its violations, produced when flattening an inventory."""

    name: str
    violations: list[Violation] = field(default_factory=list)

    def by_kind(self, kind: SubjectKind) -> list[Violation]:
        return [v for v in self.violations if v.subject_kind is kind]

    def to_dict(self) -> dict[str, object]:
        grouped: dict[str, list[dict[str, object]]] = {}
        for v in self.violations:
            grouped.setdefault(_GROUP_NAMES[v.subject_kind], []).append(v.to_dict())
        return {"name": self.name, **grouped}


_GROUP_NAMES = {
    SubjectKind.NAMESPACE: "namespace",
    SubjectKind.INGRESS: "ingresses",
    SubjectKind.SERVICE: "services",
    SubjectKind.DEPLOYMENT: "deployments",
    SubjectKind.POD: "pods",
}
