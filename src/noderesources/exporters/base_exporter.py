from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models.resources import ClusterMetrics
from ..reporters.base_reporter import COLUMN_TITLES, node_row, total_row


def cluster_metrics_rows(metrics: ClusterMetrics) -> List[Dict[str, Any]]:
    """Flatten cluster metrics into one record per node plus a final Total record."""
    rows = [dict(zip(COLUMN_TITLES, node_row(node))) for node in metrics.nodes]
    rows.append(dict(zip(COLUMN_TITLES, total_row(metrics))))
    return rows


class BaseExporter(ABC):
    """Abstract base class for file exporters.

    Subclasses should provide a DEFAULT_FILENAME and implement `export`.
    """

    DEFAULT_FILENAME: str = "cluster-metrics"

    @abstractmethod
    async def export(self, metrics: ClusterMetrics, path: str | None = None) -> str:
        """Export the cluster metrics to disk. Return the written path."""
        raise NotImplementedError()
