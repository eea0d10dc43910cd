"""
Defines the abstract base class for all reporters and the column layout
they share.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.resources import ClusterMetrics, NodeMetrics

COLUMN_TITLES = [
    "Node",
    "Node Type",
    "Physical CPU (core)",
    "Requested CPU (core)",
    "Limits CPU (core)",
    "Used CPU (core)",
    "Physical Memory (Gi)",
    "Requested Memory (Gi)",
    "Limits Memory (Gi)",
    "Used Memory (Gi)",
]


def node_row(node: NodeMetrics) -> List[str]:
    return [
        node.name,
        node.node_type.value,
        node.physical_cpu,
        node.requested_cpu,
        node.limits_cpu,
        node.used_cpu,
        node.physical_memory,
        node.requested_memory,
        node.limits_memory,
        node.used_memory,
    ]


def total_row(metrics: ClusterMetrics) -> List[str]:
    return [
        "Total",
        "",
        metrics.total_physical_cpu,
        metrics.total_requested_cpu,
        metrics.total_limits_cpu,
        metrics.total_used_cpu,
        metrics.total_physical_memory,
        metrics.total_requested_memory,
        metrics.total_limits_memory,
        metrics.total_used_memory,
    ]


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, data: ClusterMetrics):
        """
        Takes the aggregated cluster metrics and presents them in a specific
        format (e.g., console table, HTML page).
        """
        pass
