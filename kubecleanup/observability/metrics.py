"""Prometheus metrics for validation runs.

Metrics live in a private registry rather than the process default: the
tool is a one-shot CLI, so the registry is exported once per run to a
node-exporter textfile instead of being scraped.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, write_to_textfile

registry = CollectorRegistry()

resources_examined_total = Counter(
    "kubecleanup_resources_examined_total",
    "Resources examined by the validators.",
    ["kind"],
    registry=registry,
)

violations_total = Counter(
    "kubecleanup_violations_total",
    "Violations recorded, by subject kind.",
    ["subject_kind"],
    registry=registry,
)

run_duration_seconds = Gauge(
    "kubecleanup_run_duration_seconds",
    "Wall-clock duration of the last validation run.",
    registry=registry,
)

last_run_success = Gauge(
    "kubecleanup_last_run_success",
    "1 if the last validation run completed, 0 if it aborted.",
    registry=registry,
)


def export_textfile(path: str) -> None:
    """Write the registry to *path* in the textfile collector format."""
    write_to_textfile(path, registry)
