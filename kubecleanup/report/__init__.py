"""Flattening and rendering of violation inventories."""

from kubecleanup.report.assembler import assemble
from kubecleanup.report.render import NO_PROBLEMS, render

__all__ = ["NO_PROBLEMS", "assemble", "render"]
