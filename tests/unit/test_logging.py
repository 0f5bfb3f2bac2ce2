"""Tests for run-scoped logging context."""

from __future__ import annotations

import json

import pytest
import structlog

from kubecleanup.observability.logging import bind_run_context, clear_run_context, get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    clear_run_context()
    structlog.reset_defaults()


class TestRunContext:
    def test_scope_and_checks_on_every_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        bind_run_context("shop", ["ingresses", "pods"])

        get_logger("test").info("examining resources", kind="ingress")

        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert line["scope"] == "shop"
        assert line["checks"] == "ingresses,pods"
        assert line["component"] == "test"
        assert line["level"] == "info"

    def test_cluster_wide_scope(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        bind_run_context(None, [])

        get_logger("test").warning("metrics export failed")

        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert line["scope"] == "<all>"

    def test_context_cleared(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        bind_run_context("shop", ["pods"])
        clear_run_context()

        get_logger("test").info("done")

        line = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert "scope" not in line
