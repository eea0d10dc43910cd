import json
import os

import aiofiles

from ..models.resources import ClusterMetrics
from .base_exporter import BaseExporter


class JSONExporter(BaseExporter):
    """Writes the full ClusterMetrics document, node labels included."""

    DEFAULT_FILENAME = "cluster-metrics.json"

    async def export(self, metrics: ClusterMetrics, path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        # Ensure parent directory exists
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        document = metrics.model_dump(mode="json")
        async with aiofiles.open(out_path, "w", encoding="utf-8") as fh:
            await fh.write(json.dumps(document, ensure_ascii=False, indent=2))
        return out_path
