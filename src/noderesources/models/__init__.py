from .resources import (
    ClusterMetrics,
    ContainerResources,
    NodeMetrics,
    NodeQuantities,
    NodeRecord,
    NodeType,
    NodeTypeFilter,
    PodRecord,
    UsageSample,
)

__all__ = [
    "ClusterMetrics",
    "ContainerResources",
    "NodeMetrics",
    "NodeQuantities",
    "NodeRecord",
    "NodeType",
    "NodeTypeFilter",
    "PodRecord",
    "UsageSample",
]
