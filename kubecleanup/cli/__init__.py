"""kube-cleanup command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``kube-cleanup`` script).
"""

from kubecleanup.cli.main import cli

__all__ = ["cli"]
