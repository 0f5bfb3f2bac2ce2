"""Tests for environment-based configuration loading."""

from __future__ import annotations

import pytest

from kubecleanup.config import load_config


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/ops")
        config = load_config()
        assert config.cluster.kubeconfig_path == "/home/ops/.kube/config"
        assert config.cluster.in_cluster is False
        assert config.cluster.request_timeout == 30
        assert config.validation.system_namespace == "kube-system"
        assert config.report.output == "yaml"
        assert config.report.retain_all is True
        assert config.metrics.textfile_path == ""
        assert config.log.level == "info"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBECLEANUP_KUBECONFIG_PATH", "/etc/kube/admin.conf")
        monkeypatch.setenv("KUBECLEANUP_IN_CLUSTER", "yes")
        monkeypatch.setenv("KUBECLEANUP_OUTPUT", "JSON")
        monkeypatch.setenv("KUBECLEANUP_RETAIN_ALL", "false")
        monkeypatch.setenv("KUBECLEANUP_SYSTEM_NAMESPACE", "platform")
        monkeypatch.setenv("KUBECLEANUP_LOG_LEVEL", "DEBUG")
        config = load_config()
        assert config.cluster.kubeconfig_path == "/etc/kube/admin.conf"
        assert config.cluster.in_cluster is True
        assert config.report.output == "json"
        assert config.report.retain_all is False
        assert config.validation.system_namespace == "platform"
        assert config.log.level == "debug"

    def test_timeout_is_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBECLEANUP_REQUEST_TIMEOUT", "1")
        assert load_config().cluster.request_timeout == 5
        monkeypatch.setenv("KUBECLEANUP_REQUEST_TIMEOUT", "9000")
        assert load_config().cluster.request_timeout == 300

    def test_invalid_output(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBECLEANUP_OUTPUT", "kubectl")
        with pytest.raises(ValueError, match="Invalid output format"):
            load_config()

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBECLEANUP_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_non_integer_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBECLEANUP_REQUEST_TIMEOUT", "30s")
        with pytest.raises(ValueError, match="KUBECLEANUP_REQUEST_TIMEOUT"):
            load_config()
