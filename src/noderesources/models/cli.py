# src/noderesources/models/cli.py
"""
Option holders for the CLI commands. Building them from the raw Typer
parameters keeps validation in one place.
"""

from pathlib import Path
from typing import Optional

import typer

from ..core.classifier import parse_node_type_filter
from ..core.exceptions import InvalidNodeTypeError
from .resources import NodeTypeFilter

OUTPUT_FORMATS = ("csv", "json", "xlsx")


class SelectionOptions:
    """Which cluster to talk to and which nodes to report."""

    def __init__(self, node_type: str, kubeconfig: Optional[Path] = None):
        try:
            self.node_type: NodeTypeFilter = parse_node_type_filter(node_type)
        except InvalidNodeTypeError as e:
            raise typer.BadParameter(str(e)) from e
        self.kubeconfig = str(kubeconfig) if kubeconfig else None


class OutputOptions:
    """Output/export options."""

    def __init__(self, output_format: Optional[str] = None, output_path: Optional[Path] = None):
        self.output_format = output_format
        self.output_path = output_path
        self._validate()

    def _validate(self):
        """Validates the output format."""
        if self.output_format and self.output_format.lower() not in OUTPUT_FORMATS:
            raise typer.BadParameter(
                f"Invalid output format '{self.output_format}'. Must be one of: {', '.join(OUTPUT_FORMATS)}."
            )

    @property
    def is_enabled(self) -> bool:
        """Checks if file output is enabled."""
        return self.output_format is not None

    @property
    def format(self) -> str:
        """Returns the validated, lower-cased format."""
        return self.output_format.lower() if self.output_format else "csv"
