# src/noderesources/cli/main.py
"""
Root Typer application: `report` and `serve` sub-apps plus version output.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from .. import __version__
from ..core.config import config
from . import report, serve

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

app = typer.Typer(
    name="cluster-node-resources",
    help="Show capacity, requests, limits and usage of CPU and memory for every node of a Kubernetes cluster.",
    add_completion=False,
)
app.add_typer(report.app, name="report")
app.add_typer(serve.app, name="serve")


def _echo_version() -> None:
    typer.echo(f"cluster-node-resources version: {__version__}")


def _exit_with_version(requested: bool) -> None:
    if requested:
        _echo_version()
        raise typer.Exit()


@app.command("version")
def version_command():
    """Show the installed version."""
    _echo_version()


@app.callback()
def root(
    show_version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_exit_with_version, is_eager=True, help="Show the version and exit."),
    ] = None,
):
    """Per-node and cluster-wide CPU/memory figures for a Kubernetes cluster."""
