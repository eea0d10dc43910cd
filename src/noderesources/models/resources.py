# src/noderesources/models/resources.py
"""
Pydantic data models for the cluster inventory consumed by the aggregation
engine and the per-node / cluster-wide results it produces.

Inventory models carry raw Kubernetes quantity strings; result models carry
display strings plus, for nodes, the exact quantities the cluster totals are
folded from.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """Classified operational category of a node."""

    WORKER = "worker"
    MASTER = "master"
    INFRA = "infra"
    UNKNOWN = "unknown"


class NodeTypeFilter(str, Enum):
    """Node selection filter accepted by the cluster aggregator."""

    ALL = "all"
    WORKER = "worker"
    MASTER = "master"
    INFRA = "infra"


# --- Inventory (input) models ---


class NodeRecord(BaseModel):
    """A node as listed from the cluster."""

    name: str = Field(..., description="Node name, unique within the cluster.")
    labels: Dict[str, str] = Field(default_factory=dict, description="Node labels.")
    cpu_capacity: Optional[str] = Field(None, description="Raw CPU capacity quantity (e.g. '4', '3500m').")
    memory_capacity: Optional[str] = Field(None, description="Raw memory capacity quantity (e.g. '16Gi').")


class ContainerResources(BaseModel):
    """Requests and limits of one container. Absent values count as zero."""

    name: Optional[str] = Field(None, description="Container name.")
    cpu_request: Optional[str] = None
    memory_request: Optional[str] = None
    cpu_limit: Optional[str] = None
    memory_limit: Optional[str] = None


class PodRecord(BaseModel):
    """A pod scheduled on a node, with its containers' resource specs."""

    name: str
    namespace: str
    containers: List[ContainerResources] = Field(default_factory=list)


class UsageSample(BaseModel):
    """Instantaneous usage of a node reported by the metrics backend."""

    node_name: str
    cpu: str = Field(..., description="Raw CPU usage quantity (e.g. '250m', '1234567n').")
    memory: str = Field(..., description="Raw memory usage quantity (e.g. '2048Ki').")


# --- Result (output) models ---


class NodeQuantities(BaseModel):
    """Exact, unrounded figures of a node. CPU in cores, memory in bytes."""

    model_config = ConfigDict(frozen=True)

    physical_cpu: Decimal = Decimal(0)
    physical_memory: Decimal = Decimal(0)
    requested_cpu: Decimal = Decimal(0)
    requested_memory: Decimal = Decimal(0)
    limits_cpu: Decimal = Decimal(0)
    limits_memory: Decimal = Decimal(0)
    used_cpu: Decimal = Decimal(0)
    used_memory: Decimal = Decimal(0)


class NodeMetrics(BaseModel):
    """Resource figures of a single node, formatted for display."""

    model_config = ConfigDict(frozen=True)

    name: str
    node_type: NodeType
    physical_cpu: str
    physical_memory: str
    requested_cpu: str
    requested_memory: str
    limits_cpu: str
    limits_memory: str
    used_cpu: str
    used_memory: str
    labels: Dict[str, str] = Field(default_factory=dict, description="Node labels, for display only.")
    quantities: NodeQuantities = Field(default_factory=NodeQuantities, exclude=True, repr=False)


class ClusterMetrics(BaseModel):
    """Per-node metrics sorted by name, plus cluster-wide totals."""

    model_config = ConfigDict(frozen=True)

    nodes: List[NodeMetrics] = Field(default_factory=list)
    node_type_filter: NodeTypeFilter = NodeTypeFilter.ALL
    total_physical_cpu: str = "0.00"
    total_physical_memory: str = "0Gi"
    total_requested_cpu: str = "0.00"
    total_requested_memory: str = "0Gi"
    total_limits_cpu: str = "0.00"
    total_limits_memory: str = "0Gi"
    total_used_cpu: str = "0.00"
    total_used_memory: str = "0Gi"
