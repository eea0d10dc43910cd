"""Cluster node resource accounting."""

__version__ = "0.1.0"
