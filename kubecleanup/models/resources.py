"""Resource kinds and dependency references."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SubjectKind(StrEnum):
    """Kind of the resource a violation is reported against."""

    NAMESPACE = "namespace"
    INGRESS = "ingress"
    SERVICE = "service"
    DEPLOYMENT = "deployment"
    POD = "pod"


class ReferenceKind(StrEnum):
    """Kind of the downstream dependency a violation points at."""

    SERVICE = "service"
    POD = "pod"  # pod set addressed by label selector
    DEPLOYMENT = "deployment"
    REPLICA_SET = "replicaset"


@dataclass(frozen=True)
class ResourceReference:
    """Identifies the dependency that triggered a violation.

    ``name`` is empty for selector-based references; ``label_selector`` is
    only set for those.
    """

    kind: ReferenceKind
    name: str = ""
    label_selector: str = ""

    @classmethod
    def service(cls, name: str) -> ResourceReference:
        return cls(kind=ReferenceKind.SERVICE, name=name)

    @classmethod
    def pods(cls, label_selector: str) -> ResourceReference:
        return cls(kind=ReferenceKind.POD, label_selector=label_selector)

    @classmethod
    def replica_set(cls, name: str) -> ResourceReference:
        return cls(kind=ReferenceKind.REPLICA_SET, name=name)

    @classmethod
    def deployment(cls, name: str) -> ResourceReference:
        return cls(kind=ReferenceKind.DEPLOYMENT, name=name)

    def to_dict(self) -> dict[str, str]:
        """Serialise, omitting empty fields."""
        out = {"kind": self.kind.value}
        if self.name:
            out["name"] = self.name
        if self.label_selector:
            out["labelSelector"] = self.label_selector
        return out
