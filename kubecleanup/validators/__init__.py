"""Resource validators.

Each validator takes one fetched resource (plus the accessor, when it has
to resolve dependencies) and returns the list of violations it found.

Submodules
----------
namespace   -- namespaces stuck in termination.
ingress     -- Ingress -> Service -> Pods routing checks.
service     -- selector, LoadBalancer, ExternalName and backing-pod checks.
deployment  -- replica counts, labels and rollout conditions.
pods        -- Pod -> ReplicaSet -> Deployment ownership.
walker      -- the fixed dependency chains shared by the above.
"""

from kubecleanup.validators.deployment import validate_deployment
from kubecleanup.validators.ingress import validate_ingress
from kubecleanup.validators.namespace import validate_namespace
from kubecleanup.validators.pods import validate_pod_ownership
from kubecleanup.validators.service import validate_service

__all__ = [
    "validate_deployment",
    "validate_ingress",
    "validate_namespace",
    "validate_pod_ownership",
    "validate_service",
]
