"""Render namespace reports as YAML, JSON or plain text."""

from __future__ import annotations

import json

import yaml

from kubecleanup.models.resources import SubjectKind
from kubecleanup.models.violations import NamespaceReport, Violation

NO_PROBLEMS = "You don't have any problems, at all!"

_BANNER = "=" * 30

_TEXT_SECTIONS = (
    (SubjectKind.NAMESPACE, "Stuck Namespace"),
    (SubjectKind.INGRESS, "Orphaned Ingresses"),
    (SubjectKind.SERVICE, "Orphaned Services"),
    (SubjectKind.DEPLOYMENT, "Stalled Deployments"),
    (SubjectKind.POD, "Orphaned Pods"),
)


def to_document(reports: list[NamespaceReport]) -> dict[str, object]:
    return {"namespaces": [report.to_dict() for report in reports]}


def render_yaml(reports: list[NamespaceReport]) -> str:
    return yaml.safe_dump(to_document(reports), sort_keys=False, default_flow_style=False)


def render_json(reports: list[NamespaceReport]) -> str:
    return json.dumps(to_document(reports), indent=4)


def _text_line(violation: Violation) -> str:
    line = f"* {violation.subject_name}, {violation.reason}"
    ref = violation.reference
    if ref is not None:
        target = ref.name or ref.label_selector or "<all>"
        line += f" ({ref.kind.value} {target})"
    if violation.detail:
        line += f": {violation.detail}"
    return line


def render_text(reports: list[NamespaceReport]) -> str:
    lines: list[str] = []
    for report in reports:
        lines += ["", _BANNER, f"Namespace: {report.name}", _BANNER]
        for kind, heading in _TEXT_SECTIONS:
            violations = report.by_kind(kind)
            if not violations:
                continue
            lines += ["", heading]
            lines += [_text_line(v) for v in violations]
        lines.append("")
    return "\n".join(lines)


_RENDERERS = {
    "yaml": render_yaml,
    "json": render_json,
    "text": render_text,
}


def render(reports: list[NamespaceReport], output: str = "yaml") -> str:
    """Render *reports* in the given output format."""
    if not reports:
        return NO_PROBLEMS
    try:
        renderer = _RENDERERS[output]
    except KeyError:
        raise ValueError(f"Unknown output format: {output}") from None
    return renderer(reports)
