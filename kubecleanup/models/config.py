"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClusterConfig:
    """How to reach the cluster."""

    kubeconfig_path: str = ""
    context: str = ""
    in_cluster: bool = False
    request_timeout: int = 30


@dataclass
class ValidationConfig:
    """Validator tunables."""

    system_namespace: str = "kube-system"


@dataclass
class ReportConfig:
    """Report rendering configuration."""

    output: str = "yaml"
    retain_all: bool = True


@dataclass
class MetricsConfig:
    """Prometheus textfile export configuration."""

    textfile_path: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class KubeCleanupConfig:
    """Top-level kube-cleanup configuration."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    log: LogConfig = field(default_factory=LogConfig)
