"""Logging and metrics for kube-cleanup."""
