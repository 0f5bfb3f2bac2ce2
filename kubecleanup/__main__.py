"""Entry point for `python -m kubecleanup`.

Usage:
    python -m kubecleanup list
    python -m kubecleanup -o json list --namespace shop
"""

from __future__ import annotations

from kubecleanup.cli import cli

cli(prog_name="kube-cleanup")
