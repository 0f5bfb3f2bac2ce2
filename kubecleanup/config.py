"""Configuration loading from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from kubecleanup.models.config import (
    ClusterConfig,
    KubeCleanupConfig,
    LogConfig,
    MetricsConfig,
    ReportConfig,
    ValidationConfig,
)

OUTPUT_FORMATS = ("yaml", "json", "text")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBECLEANUP_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = _env(key, str(default))
    try:
        val = int(raw)
    except ValueError:
        raise ValueError(f"Invalid integer for KUBECLEANUP_{key}: {raw!r}") from None
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _default_kubeconfig() -> str:
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE", "")
    if not home:
        return ""
    return str(Path(home) / ".kube" / "config")


def validate_output(value: str) -> str:
    if value.lower() not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output format: {value}. Must be one of {OUTPUT_FORMATS}")
    return value.lower()


def validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> KubeCleanupConfig:
    """Load configuration from KUBECLEANUP_* environment variables."""
    return KubeCleanupConfig(
        cluster=ClusterConfig(
            kubeconfig_path=_env("KUBECONFIG_PATH", _default_kubeconfig()),
            context=_env("CONTEXT", ""),
            in_cluster=_env_bool("IN_CLUSTER", False),
            request_timeout=_env_int("REQUEST_TIMEOUT", 30, min_val=5, max_val=300),
        ),
        validation=ValidationConfig(
            system_namespace=_env("SYSTEM_NAMESPACE", "kube-system"),
        ),
        report=ReportConfig(
            output=validate_output(_env("OUTPUT", "yaml")),
            retain_all=_env_bool("RETAIN_ALL", True),
        ),
        metrics=MetricsConfig(
            textfile_path=_env("METRICS_FILE", ""),
        ),
        log=LogConfig(
            level=validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
