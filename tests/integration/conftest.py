"""Shared fixtures for kube-cleanup integration tests.

Provides an in-memory cluster snapshot with one healthy application and a
handful of deliberately broken resources, so the engine can be exercised
end to end without touching a real cluster.
"""

from __future__ import annotations

import pytest

from tests.factories import (
    FakeAccessor,
    condition,
    http_path,
    make_deployment,
    make_ingress,
    make_namespace,
    make_pod,
    make_replica_set,
    make_rule,
    make_service,
    owner,
)


@pytest.fixture
def cluster() -> FakeAccessor:
    """A small cluster: a healthy ``shop/storefront`` stack plus known breakage."""
    return FakeAccessor(
        namespaces=[
            make_namespace("default"),
            make_namespace("kube-system"),
            make_namespace("shop"),
            make_namespace("legacy", phase="Terminating", finalizers=["kubernetes"]),
        ],
        ingresses=[
            make_ingress("storefront", rules=[make_rule(http_path("storefront"))]),
            make_ingress("web", rules=[make_rule(http_path("cart"))]),
        ],
        services=[
            make_service("kubernetes", namespace="default", selector=None, ports=[443]),
            make_service("storefront", selector={"app": "storefront"}),
            make_service("api", selector={"app": "api"}),
            make_service("edge", svc_type="LoadBalancer", selector={"app": "storefront"}),
            make_service("legacy-db", svc_type="ExternalName", selector=None, external_name="10.1.2.3"),
        ],
        deployments=[
            make_deployment("storefront"),
            make_deployment("worker", replicas=3, ready=0),
            make_deployment(
                "batch",
                conditions=[condition("Progressing", "False", "ProgressDeadlineExceeded", "batch rollout stalled")],
            ),
        ],
        replica_sets=[
            make_replica_set("storefront-6c9f", owners=[owner("Deployment", "storefront")]),
            make_replica_set("reports-55d1", owners=[owner("Deployment", "reports")]),
        ],
        pods=[
            make_pod("storefront-6c9f-a", labels={"app": "storefront"}, owners=[owner("ReplicaSet", "storefront-6c9f")]),
            make_pod("reports-55d1-a", labels={"app": "reports"}, owners=[owner("ReplicaSet", "reports-55d1")]),
            make_pod("cron-8d2a-a", labels={"app": "cron"}, owners=[owner("ReplicaSet", "cron-8d2a")]),
            make_pod("debug-shell", labels={"run": "debug"}),
            make_pod("coredns-1", namespace="kube-system", labels={"k8s-app": "kube-dns"}),
        ],
    )
