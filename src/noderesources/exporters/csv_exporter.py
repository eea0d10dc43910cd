import csv
import io
import os
from typing import Any

import aiofiles

from ..models.resources import ClusterMetrics
from ..reporters.base_reporter import COLUMN_TITLES
from .base_exporter import BaseExporter, cluster_metrics_rows


class CSVExporter(BaseExporter):
    """Writes one CSV line per node, then a Total line."""

    DEFAULT_FILENAME = "cluster-metrics.csv"

    async def export(self, metrics: ClusterMetrics, path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        # Ensure parent directory exists
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        # csv.DictWriter is synchronous: render into memory, then write asynchronously.
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=COLUMN_TITLES)
        writer.writeheader()
        for row in cluster_metrics_rows(metrics):
            writer.writerow({k: self._sanitize_cell(v) for k, v in row.items()})

        async with aiofiles.open(out_path, "w", encoding="utf-8", newline="") as fh:
            await fh.write(output.getvalue())
        return out_path

    def _sanitize_cell(self, value: Any) -> Any:
        """
        Sanitize value to prevent CSV formula injection.
        If the value is a string starting with =, +, -, or @, prefix it with a single quote.
        """
        if isinstance(value, str) and value.startswith(("=", "+", "-", "@")):
            return f"'{value}"
        return value
