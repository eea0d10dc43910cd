"""Exporters package for file-based report outputs."""

from .base_exporter import BaseExporter, cluster_metrics_rows
from .csv_exporter import CSVExporter
from .excel_exporter import ExcelExporter
from .json_exporter import JSONExporter

__all__ = ["BaseExporter", "CSVExporter", "ExcelExporter", "JSONExporter", "cluster_metrics_rows"]
