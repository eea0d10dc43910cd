"""
A reporter that displays the cluster metrics in a formatted table in the console.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..models.resources import ClusterMetrics
from .base_reporter import BaseReporter, node_row, total_row

logger = logging.getLogger(__name__)

# (title, style, justify)
_COLUMNS = [
    ("Node", "cyan", "left"),
    ("Node Type", "magenta", "left"),
    ("Physical CPU", "blue", "right"),
    ("Requested CPU", "green", "right"),
    ("Limits CPU", "red", "right"),
    ("Used CPU", "yellow", "right"),
    ("Physical Memory (Gi)", "blue", "right"),
    ("Requested Memory (Gi)", "green", "right"),
    ("Limits Memory (Gi)", "red", "right"),
    ("Used Memory (Gi)", "yellow", "right"),
]


class ConsoleReporter(BaseReporter):
    """
    Renders cluster metrics to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report(self, data: ClusterMetrics):
        """
        Displays one row per node, in name order, followed by a Total row.
        With no matching node a notice precedes the zero-total table.
        """
        if not data.nodes:
            self.console.print(
                f"No nodes matched node type '{data.node_type_filter.value}'.",
                style="yellow",
            )

        table = Table(
            title="Cluster Metrics",
            header_style="bold magenta",
        )
        for title, style, justify in _COLUMNS:
            table.add_column(title, style=style, justify=justify)

        for node in data.nodes:
            table.add_row(*node_row(node))

        table.add_section()
        table.add_row(*total_row(data), style="bold")

        self.console.print(table)
