# src/noderesources/cli/serve.py
"""
Implements the `serve` command: run the HTTP dashboard/API server.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..api import app as api_app
from ..core.config import config

logger = logging.getLogger(__name__)

app = typer.Typer(name="serve", help="Start the cluster metrics web server.", add_completion=False)


@app.callback(invoke_without_command=True)
def serve(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Address to bind.")] = config.API_HOST,
    port: Annotated[int, typer.Option("--port", help="Port to listen on.")] = config.API_PORT,
    kubeconfig: Annotated[
        Optional[Path],
        typer.Option("--kubeconfig", help="Path to the kubeconfig file when not running in-cluster."),
    ] = None,
) -> None:
    """
    Serve /metrics (HTML), /api/v1/metrics (JSON) and /download/excel.
    """
    if ctx.invoked_subcommand is not None:
        return

    logger.info("Server mode -- default node type: %s", config.SERVER_NODE_TYPE)
    api_app.serve(host=host, port=port, kubeconfig=str(kubeconfig) if kubeconfig else None)
