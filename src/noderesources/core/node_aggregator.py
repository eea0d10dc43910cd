# src/noderesources/core/node_aggregator.py
"""
Computes the resource figures of a single node: physical capacity, the sum
of container requests and limits of the pods scheduled on it, and its live
usage.
"""

import logging
from decimal import Decimal
from typing import Iterable, Tuple

from ..collectors.base_inventory import InventoryProvider
from ..models.resources import NodeMetrics, NodeQuantities, NodeRecord, PodRecord, UsageSample
from ..utils.quantity import format_cpu, format_memory, parse_optional_quantity, parse_quantity
from .classifier import classify_node
from .exceptions import ConfigurationFault

logger = logging.getLogger(__name__)


def sum_pod_resources(pods: Iterable[PodRecord]) -> Tuple[Decimal, Decimal, Decimal, Decimal]:
    """
    Sum requests and limits over every container of every pod.

    Returns:
        (requested_cpu, requested_memory, limits_cpu, limits_memory), CPU in
        cores and memory in bytes. A container without a request or limit for
        a resource contributes zero to that sum.
    """
    requested_cpu = requested_memory = limits_cpu = limits_memory = Decimal(0)
    for pod in pods:
        for container in pod.containers:
            requested_cpu += parse_optional_quantity(container.cpu_request)
            requested_memory += parse_optional_quantity(container.memory_request)
            limits_cpu += parse_optional_quantity(container.cpu_limit)
            limits_memory += parse_optional_quantity(container.memory_limit)
    return requested_cpu, requested_memory, limits_cpu, limits_memory


def physical_capacity(node: NodeRecord) -> Tuple[Decimal, Decimal]:
    """
    Return the node's (cpu cores, memory bytes) capacity.

    Raises:
        ConfigurationFault: If the node reports no CPU or memory capacity.
    """
    missing = [
        resource
        for resource, value in (("cpu", node.cpu_capacity), ("memory", node.memory_capacity))
        if value is None
    ]
    if missing:
        raise ConfigurationFault(f"Node '{node.name}' has no {' or '.join(missing)} capacity in its status.")
    return parse_quantity(node.cpu_capacity), parse_quantity(node.memory_capacity)


def build_node_metrics(node: NodeRecord, pods: Iterable[PodRecord], usage: UsageSample) -> NodeMetrics:
    """Combine a node, its pods and its usage sample into a NodeMetrics record."""
    physical_cpu, physical_memory = physical_capacity(node)
    requested_cpu, requested_memory, limits_cpu, limits_memory = sum_pod_resources(pods)

    quantities = NodeQuantities(
        physical_cpu=physical_cpu,
        physical_memory=physical_memory,
        requested_cpu=requested_cpu,
        requested_memory=requested_memory,
        limits_cpu=limits_cpu,
        limits_memory=limits_memory,
        used_cpu=parse_quantity(usage.cpu),
        used_memory=parse_quantity(usage.memory),
    )

    return NodeMetrics(
        name=node.name,
        node_type=classify_node(node.labels),
        physical_cpu=format_cpu(quantities.physical_cpu),
        physical_memory=format_memory(quantities.physical_memory),
        requested_cpu=format_cpu(quantities.requested_cpu),
        requested_memory=format_memory(quantities.requested_memory),
        limits_cpu=format_cpu(quantities.limits_cpu),
        limits_memory=format_memory(quantities.limits_memory),
        used_cpu=format_cpu(quantities.used_cpu),
        used_memory=format_memory(quantities.used_memory),
        labels=dict(node.labels),
        quantities=quantities,
    )


async def calculate_node_metrics(inventory: InventoryProvider, node: NodeRecord) -> NodeMetrics:
    """
    Fetch the pods and the usage sample of one node and compute its metrics.

    Any inventory, parse or configuration error propagates unchanged; usage is
    never replaced by zero.
    """
    pods = await inventory.list_pods(node.name)
    usage = await inventory.get_usage(node.name)
    metrics = build_node_metrics(node, pods, usage)
    logger.debug(
        "Node '%s' (%s): cpu phys=%s req=%s lim=%s used=%s | mem phys=%s req=%s lim=%s used=%s",
        metrics.name,
        metrics.node_type.value,
        metrics.physical_cpu,
        metrics.requested_cpu,
        metrics.limits_cpu,
        metrics.used_cpu,
        metrics.physical_memory,
        metrics.requested_memory,
        metrics.limits_memory,
        metrics.used_memory,
    )
    return metrics
