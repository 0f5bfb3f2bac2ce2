"""End-to-end runs of the validation engine over an in-memory cluster."""

from __future__ import annotations

import pytest

from kubecleanup.accessor import AccessorError
from kubecleanup.app import FatalError, run
from kubecleanup.engine import (
    Check,
    run_checks,
    validate_deployments,
    validate_ingresses,
    validate_namespaces,
    validate_pods,
    validate_services,
)
from kubecleanup.models import ResourceReference, SubjectKind
from kubecleanup.models.config import KubeCleanupConfig
from kubecleanup.report import assemble
from tests.factories import FakeAccessor, make_deployment, make_ingress, make_namespace, make_service

pytestmark = pytest.mark.integration


def _summary(inventory) -> dict[str, dict[str, list[str]]]:
    out: dict[str, dict[str, list[str]]] = {}
    for v in inventory:
        out.setdefault(v.namespace, {}).setdefault(v.subject_name, []).append(v.reason)
    return out


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    async def test_scenario_a_ingress_to_missing_service(self) -> None:
        accessor = FakeAccessor(ingresses=[make_ingress("web", namespace="shop")])
        inventory = await validate_ingresses(accessor)

        latest = inventory.latest()
        v = latest["shop"][(SubjectKind.INGRESS, "web")]
        assert v.reason == "references a missing service"
        assert v.reference == ResourceReference.service("cart")
        assert len(inventory) == 1

    async def test_scenario_b_service_without_pods(self) -> None:
        accessor = FakeAccessor(services=[make_service("api", namespace="shop", selector={"app": "api"})])
        inventory = await validate_services(accessor)

        [v] = inventory.violations()
        assert (v.namespace, v.subject_name) == ("shop", "api")
        assert v.reason == "backing workload contains no pods"
        assert v.reference == ResourceReference.pods("app=api")

    async def test_scenario_c_deployment_without_ready_replicas(self) -> None:
        accessor = FakeAccessor(deployments=[make_deployment("worker", replicas=3, ready=0)])
        inventory = await validate_deployments(accessor)
        assert [v.reason for v in inventory] == ["no replicas are ready"]

    async def test_scenario_d_namespace_stuck_in_termination(self) -> None:
        stuck = FakeAccessor(namespaces=[make_namespace("legacy", phase="Terminating", finalizers=["kubernetes"])])
        inventory = await validate_namespaces(stuck)
        assert [(v.namespace, v.reason) for v in inventory] == [("legacy", "stuck in termination")]

        released = FakeAccessor(namespaces=[make_namespace("legacy", phase="Terminating", finalizers=[])])
        assert not await validate_namespaces(released)


# ---------------------------------------------------------------------------
# Full cluster
# ---------------------------------------------------------------------------


class TestFullRun:
    async def test_all_checks(self, cluster: FakeAccessor) -> None:
        inventory = await run_checks(cluster)

        assert _summary(inventory) == {
            "legacy": {"legacy": ["stuck in termination"]},
            "shop": {
                "web": ["references a missing service"],
                "api": ["backing workload contains no pods"],
                "edge": ["LoadBalancer service in pending state"],
                "legacy-db": ["10.1.2.3 is not a valid CNAME"],
                "worker": ["no replicas are ready"],
                "batch": ["batch rollout stalled"],
                "reports-55d1-a": ["owner of the owner is missing"],
                "cron-8d2a-a": ["owner is missing"],
                "debug-shell": ["pod is not owned by anyone"],
            },
        }

    async def test_checks_run_in_canonical_order(self, cluster: FakeAccessor) -> None:
        await run_checks(cluster, [Check.PODS, Check.NAMESPACES])
        ops = [op for op, _ in cluster.calls]
        assert ops[0] == "list_namespaces"
        assert ops.index("list_pods") > 0
        assert "list_ingresses" not in ops

    async def test_namespace_scope(self, cluster: FakeAccessor) -> None:
        inventory = await run_checks(cluster, namespace="legacy")
        assert inventory.namespaces() == ["legacy"]
        assert cluster.calls_to("list_pods")[0] == ("legacy", None)

    async def test_idempotent(self, cluster: FakeAccessor) -> None:
        first = await run_checks(cluster)
        second = await run_checks(cluster)
        assert first == second

    async def test_pods_in_system_namespace_never_reported(self, cluster: FakeAccessor) -> None:
        inventory = await validate_pods(cluster)
        assert "kube-system" not in inventory.namespaces()

    async def test_report_flattening(self, cluster: FakeAccessor) -> None:
        reports = assemble(await run_checks(cluster))
        assert [r.name for r in reports] == ["legacy", "shop"]
        assert len(reports[1].by_kind(SubjectKind.POD)) == 3


# ---------------------------------------------------------------------------
# Error tiers
# ---------------------------------------------------------------------------


class TestErrorTiers:
    async def test_top_level_list_failure_is_fatal(self) -> None:
        accessor = FakeAccessor(failing={"list_services"})
        with pytest.raises(AccessorError):
            await validate_services(accessor)

    async def test_dependency_failure_is_a_violation(self, cluster: FakeAccessor) -> None:
        cluster.failing = {"get_service"}
        inventory = await validate_ingresses(cluster)
        assert [v.reason for v in inventory] == ["references a missing service"] * 2

    async def test_run_wraps_fatal_error(self, cluster: FakeAccessor) -> None:
        cluster.failing = {"list_deployments"}
        with pytest.raises(FatalError) as exc_info:
            await run(KubeCleanupConfig(), accessor=cluster)
        assert exc_info.value.stage == "list_deployments"

    async def test_run_returns_inventory(self, cluster: FakeAccessor) -> None:
        config = KubeCleanupConfig()
        config.validation.system_namespace = "shop"
        inventory = await run(config, [Check.PODS], accessor=cluster)
        # kube-system is no longer reserved; coredns has no owner.
        assert [(v.namespace, v.subject_name) for v in inventory] == [("kube-system", "coredns-1")]

    async def test_run_writes_metrics_file(self, cluster: FakeAccessor, tmp_path) -> None:
        config = KubeCleanupConfig()
        config.metrics.textfile_path = str(tmp_path / "kubecleanup.prom")
        await run(config, [Check.NAMESPACES], accessor=cluster)
        text = (tmp_path / "kubecleanup.prom").read_text()
        assert "kubecleanup_last_run_success 1.0" in text
        assert 'kubecleanup_resources_examined_total{kind="namespace"}' in text
