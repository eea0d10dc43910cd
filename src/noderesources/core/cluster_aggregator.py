# src/noderesources/core/cluster_aggregator.py
"""
Runs the per-node aggregation concurrently over the selected nodes and folds
the results into cluster-wide totals.

Totals are summed from the exact per-node quantities and converted to
display strings once, at the end, so rounding of individual node figures
never leaks into the totals.
"""

import logging
import time
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from ..collectors.base_inventory import InventoryProvider
from ..models.resources import ClusterMetrics, NodeMetrics, NodeQuantities, NodeRecord, NodeTypeFilter
from ..utils.quantity import format_cpu, format_memory
from .classifier import matches_filter, parse_node_type_filter
from .concurrency import gather_fail_fast
from .config import config
from .node_aggregator import calculate_node_metrics

logger = logging.getLogger(__name__)


def select_nodes(nodes: Iterable[NodeRecord], node_type: NodeTypeFilter) -> List[NodeRecord]:
    """Keep the nodes matching the filter (by raw role-label presence)."""
    return [node for node in nodes if matches_filter(node.labels, node_type)]


def sort_node_metrics_by_name(nodes: Iterable[NodeMetrics]) -> List[NodeMetrics]:
    return sorted(nodes, key=lambda n: n.name)


def fold_cluster_metrics(
    node_metrics: Iterable[NodeMetrics],
    node_type: NodeTypeFilter = NodeTypeFilter.ALL,
) -> ClusterMetrics:
    """Build a ClusterMetrics from per-node results, in any order."""
    nodes = sort_node_metrics_by_name(node_metrics)

    totals = {field: Decimal(0) for field in NodeQuantities.model_fields}
    for node in nodes:
        for field in totals:
            totals[field] += getattr(node.quantities, field)

    return ClusterMetrics(
        nodes=nodes,
        node_type_filter=node_type,
        total_physical_cpu=format_cpu(totals["physical_cpu"]),
        total_physical_memory=format_memory(totals["physical_memory"]),
        total_requested_cpu=format_cpu(totals["requested_cpu"]),
        total_requested_memory=format_memory(totals["requested_memory"]),
        total_limits_cpu=format_cpu(totals["limits_cpu"]),
        total_limits_memory=format_memory(totals["limits_memory"]),
        total_used_cpu=format_cpu(totals["used_cpu"]),
        total_used_memory=format_memory(totals["used_memory"]),
    )


async def calculate_cluster_metrics(
    inventory: InventoryProvider,
    node_type: Union[str, NodeTypeFilter] = NodeTypeFilter.ALL,
    nodes: Optional[Iterable[NodeRecord]] = None,
    max_concurrency: Optional[int] = None,
) -> ClusterMetrics:
    """
    Compute per-node metrics for every selected node and the cluster totals.

    Args:
        inventory: Source of nodes, pods and usage samples.
        node_type: 'all', 'worker', 'master' or 'infra'.
        nodes: Node list to select from; listed from the inventory when omitted.
        max_concurrency: Cap on concurrent per-node tasks (0 = unbounded).
            Defaults to MAX_CONCURRENT_NODES.

    Raises:
        InvalidNodeTypeError: If node_type is not a supported filter.
        InventoryError, QuantityParseError, ConfigurationFault: If any
            selected node cannot be computed. No partial result is returned.
    """
    node_filter = parse_node_type_filter(node_type)
    limit = config.MAX_CONCURRENT_NODES if max_concurrency is None else max_concurrency
    started = time.monotonic()

    if nodes is None:
        nodes = await inventory.list_nodes()
    selected = select_nodes(nodes, node_filter)
    logger.info("Collecting metrics for %d node(s) (node type: %s).", len(selected), node_filter.value)

    async def _for_node(node: NodeRecord) -> NodeMetrics:
        return await calculate_node_metrics(inventory, node)

    node_metrics = await gather_fail_fast(_for_node, selected, limit=limit)
    result = fold_cluster_metrics(node_metrics, node_filter)

    logger.info(
        "Aggregated %d node(s) in %.2fs: cpu req=%s/%s, mem req=%s/%s.",
        len(result.nodes),
        time.monotonic() - started,
        result.total_requested_cpu,
        result.total_physical_cpu,
        result.total_requested_memory,
        result.total_physical_memory,
    )
    return result
