# src/noderesources/cli/report.py
"""
Implements the `report` command: one aggregation pass printed as a table or
written to a file.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..collectors.kubernetes_inventory import KubernetesInventory
from ..core.cluster_aggregator import calculate_cluster_metrics
from ..core.config import config
from ..core.exceptions import NodeResourcesError
from ..exporters.csv_exporter import CSVExporter
from ..exporters.excel_exporter import ExcelExporter
from ..exporters.json_exporter import JSONExporter
from ..models.cli import OutputOptions, SelectionOptions
from ..models.resources import ClusterMetrics
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

app = typer.Typer(help="Report node and cluster resource figures.", add_completion=False)

EXPORTERS = {
    "csv": CSVExporter,
    "json": JSONExporter,
    "xlsx": ExcelExporter,
}


async def handle_export(metrics: ClusterMetrics, output_options: OutputOptions) -> str:
    """Handles writing the report data to a file."""
    exporter = EXPORTERS[output_options.format]()

    if not output_options.output_path:
        output_path = Path.cwd() / "data" / exporter.DEFAULT_FILENAME
    else:
        output_path = Path(output_options.output_path)

    try:
        written_path = await exporter.export(metrics, str(output_path))
    except OSError as e:
        logger.error("Failed to export report to %s: %s", output_path, e)
        raise typer.Exit(code=1)

    logger.info("Successfully exported report to %s", written_path)
    print(f"Report exported to: {written_path}", file=sys.stderr)
    return written_path


@app.callback(invoke_without_command=True)
def report(
    ctx: typer.Context,
    node_type: Annotated[
        str,
        typer.Option("--node-type", help="Node type to report: all, worker, master or infra."),
    ] = config.CLI_NODE_TYPE,
    kubeconfig: Annotated[
        Optional[Path],
        typer.Option("--kubeconfig", help="Path to the kubeconfig file. Defaults to $KUBECONFIG."),
    ] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            help="Output format (csv/json/xlsx). If set, writes to a file instead of the console.",
            case_sensitive=False,
        ),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option(
            "--output-path",
            help="Output file path. Default: ./data/ plus the format's default name "
            "(cluster-metrics.csv, cluster-metrics.json, cluster_metrics.xlsx).",
            exists=False,
            dir_okay=False,
            writable=True,
        ),
    ] = None,
):
    """
    Compute per-node and cluster-wide CPU/memory figures.

    Displays a table in the console by default.
    Use --output (csv/json/xlsx) to export to a file.
    """
    if ctx.invoked_subcommand is not None:
        return

    selection = SelectionOptions(node_type=node_type, kubeconfig=kubeconfig or config.KUBECONFIG)
    output = OutputOptions(output_format=output_format, output_path=output_path)

    print(f"CLI mode -- node type: {selection.node_type.value}, collecting node metrics", file=sys.stderr)

    async def _report_async():
        inventory = KubernetesInventory(kubeconfig=selection.kubeconfig)
        try:
            metrics = await calculate_cluster_metrics(inventory, selection.node_type)
        finally:
            await inventory.close()

        if output.is_enabled:
            await handle_export(metrics, output)
        else:
            ConsoleReporter().report(metrics)

    try:
        asyncio.run(_report_async())
    except typer.Exit:
        raise
    except NodeResourcesError as e:
        logger.error("Report generation failed: %s", e)
        raise typer.Exit(code=1)
