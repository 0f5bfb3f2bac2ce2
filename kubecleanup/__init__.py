"""kube-cleanup: find Kubernetes resources whose declared dependencies are broken."""

__version__ = "0.3.0"
