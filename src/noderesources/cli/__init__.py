# src/noderesources/cli/__init__.py
"""
cluster-node-resources CLI package.

Exposes the top-level Typer `app` for the console entrypoint and tests.
"""

from .main import app

__all__ = ["app"]
