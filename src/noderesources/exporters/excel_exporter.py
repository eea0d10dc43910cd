import asyncio
import io
import logging
import os
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from ..models.resources import ClusterMetrics
from ..reporters.base_reporter import COLUMN_TITLES
from ..utils.quantity import display_to_float
from .base_exporter import BaseExporter, cluster_metrics_rows

logger = logging.getLogger(__name__)

SHEET_TITLE = "Cluster Metrics"
CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Node and Node Type stay text; every other column is numeric.
_TEXT_COLUMNS = 2
_HEADER_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")


class ExcelExporter(BaseExporter):
    """
    Writes cluster metrics to an .xlsx workbook.

    CPU and memory cells are numbers obtained by re-parsing the display
    strings ("2.50" -> 2.5, "16Gi" -> 16.0).
    """

    DEFAULT_FILENAME = "cluster_metrics.xlsx"

    def build_workbook(self, metrics: ClusterMetrics) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        ws.append(COLUMN_TITLES)
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = _HEADER_FILL

        rows = cluster_metrics_rows(metrics)
        for row in rows:
            ws.append(self._to_cells(row))

        for cell in ws[ws.max_row]:
            cell.font = Font(bold=True)

        for idx, title in enumerate(COLUMN_TITLES, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = max(12, len(title) + 2)

        logger.debug("Built workbook with %d node row(s).", len(rows) - 1)
        return wb

    def to_bytes(self, metrics: ClusterMetrics) -> bytes:
        """Serialize the workbook in memory, e.g. for an HTTP download."""
        buffer = io.BytesIO()
        self.build_workbook(metrics).save(buffer)
        return buffer.getvalue()

    async def export(self, metrics: ClusterMetrics, path: str | None = None) -> str:
        out_path = path or self.DEFAULT_FILENAME
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        # openpyxl is synchronous; keep the event loop free while it writes.
        await asyncio.to_thread(self.build_workbook(metrics).save, out_path)
        return out_path

    @staticmethod
    def _to_cells(row: Dict[str, Any]) -> List[Any]:
        values = [row[title] for title in COLUMN_TITLES]
        return values[:_TEXT_COLUMNS] + [display_to_float(value) for value in values[_TEXT_COLUMNS:]]
