"""Application run for kube-cleanup.

Wires the components for one validation run:
config -> logging -> K8s client -> engine -> metrics export -> client close.

A run either completes with an inventory (possibly empty) or aborts with
FatalError; there is no partial report.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from kubecleanup.accessor.base import AccessorError, ResourceAccessor
from kubecleanup.engine import Check, run_checks
from kubecleanup.models.config import KubeCleanupConfig
from kubecleanup.models.violations import ViolationInventory
from kubecleanup.observability.logging import bind_run_context, clear_run_context, get_logger
from kubecleanup.observability.metrics import export_textfile, last_run_success, run_duration_seconds

if TYPE_CHECKING:
    from kubecleanup.accessor.kubernetes import KubernetesAccessor


class FatalError(Exception):
    """Raised when a run cannot complete: no client, or a top-level list failed."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause


async def run(
    config: KubeCleanupConfig,
    checks: Iterable[Check] = tuple(Check),
    namespace: str | None = None,
    accessor: ResourceAccessor | None = None,
) -> ViolationInventory:
    """Execute one validation run and return its inventory.

    When *accessor* is None a kubernetes-asyncio accessor is built from
    ``config.cluster`` and closed afterwards.
    """
    checks = list(checks)
    bind_run_context(namespace, [c.value for c in checks])
    log = get_logger("app")
    log.info("kube-cleanup starting", version=_version())
    t_start = time.monotonic()

    owned: KubernetesAccessor | None = None
    if accessor is None:
        owned = await _connect(config)
        accessor = owned

    completed = False
    try:
        inventory = await run_checks(
            accessor,
            checks,
            namespace=namespace,
            system_namespace=config.validation.system_namespace,
        )
        log.info("kube-cleanup finished", violations=len(inventory), namespaces=len(inventory.namespaces()))
        completed = True
    except AccessorError as exc:
        raise FatalError(exc.operation, exc) from exc
    finally:
        last_run_success.set(1 if completed else 0)
        run_duration_seconds.set(time.monotonic() - t_start)
        if owned is not None:
            await owned.close()
        _export_metrics(config)
        clear_run_context()

    return inventory


async def _connect(config: KubeCleanupConfig) -> KubernetesAccessor:
    from kubecleanup.accessor.kubernetes import KubernetesAccessor, connect

    try:
        api_client = await connect(config.cluster)
    except AccessorError as exc:
        raise FatalError("k8s_client", exc) from exc
    return KubernetesAccessor(api_client, request_timeout=config.cluster.request_timeout)


def _export_metrics(config: KubeCleanupConfig) -> None:
    path = config.metrics.textfile_path
    if not path:
        return
    try:
        export_textfile(path)
    except OSError as exc:
        get_logger("app").warning("metrics export failed", path=path, error=str(exc))


def _version() -> str:
    from kubecleanup import __version__

    return __version__
