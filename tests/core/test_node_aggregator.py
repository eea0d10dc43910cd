# tests/core/test_node_aggregator.py

from decimal import Decimal

import pytest

from factories import INFRA_LABEL, WORKER_LABEL, FakeInventory, make_node, make_pod
from noderesources.core.exceptions import ConfigurationFault, InventoryError, QuantityParseError
from noderesources.core.node_aggregator import (
    build_node_metrics,
    calculate_node_metrics,
    physical_capacity,
    sum_pod_resources,
)
from noderesources.models.resources import ContainerResources, NodeRecord, NodeType, UsageSample


def test_sum_pod_resources_across_pods_and_containers():
    pods = [
        make_pod(
            "a",
            ContainerResources(cpu_request="250m", memory_request="128Mi", cpu_limit="500m", memory_limit="256Mi"),
            ContainerResources(cpu_request="250m", memory_request="128Mi", cpu_limit="1", memory_limit="256Mi"),
        ),
        make_pod("b", ContainerResources(cpu_request="1", memory_request="1G")),
    ]
    requested_cpu, requested_memory, limits_cpu, limits_memory = sum_pod_resources(pods)
    assert requested_cpu == Decimal("1.5")
    assert requested_memory == Decimal(256 * 1024**2 + 10**9)
    assert limits_cpu == Decimal("1.5")
    assert limits_memory == Decimal(512 * 1024**2)


def test_best_effort_containers_contribute_zero():
    pods = [make_pod("best-effort", ContainerResources(name="c"))]
    assert sum_pod_resources(pods) == (Decimal(0), Decimal(0), Decimal(0), Decimal(0))


def test_no_pods_gives_zero():
    assert sum_pod_resources([]) == (Decimal(0), Decimal(0), Decimal(0), Decimal(0))


def test_invalid_request_raises_parse_error():
    pods = [make_pod("broken", ContainerResources(cpu_request="half"))]
    with pytest.raises(QuantityParseError):
        sum_pod_resources(pods)


def test_missing_capacity_is_a_configuration_fault():
    node = NodeRecord(name="n1", cpu_capacity="4", memory_capacity=None)
    with pytest.raises(ConfigurationFault, match="memory"):
        physical_capacity(node)


def test_build_node_metrics_formats_and_keeps_exact_values():
    node = make_node("n1", {WORKER_LABEL: "", "zone": "a"}, cpu="3500m", memory="16Gi")
    pods = [make_pod("p", ContainerResources(cpu_request="333m", memory_request="1500M"))]
    usage = UsageSample(node_name="n1", cpu="1240000000n", memory="2Gi")

    metrics = build_node_metrics(node, pods, usage)

    assert metrics.name == "n1"
    assert metrics.node_type == NodeType.WORKER
    assert metrics.physical_cpu == "3.50"
    assert metrics.physical_memory == "17Gi"
    assert metrics.requested_cpu == "0.33"
    assert metrics.requested_memory == "1Gi"
    assert metrics.limits_cpu == "0.00"
    assert metrics.limits_memory == "0Gi"
    assert metrics.used_cpu == "1.24"
    assert metrics.used_memory == "2Gi"
    assert metrics.labels == {WORKER_LABEL: "", "zone": "a"}
    assert metrics.quantities.requested_memory == Decimal(1_500_000_000)
    assert metrics.quantities.used_cpu == Decimal("1.24")


def test_quantities_are_not_serialized():
    node = make_node("n1")
    metrics = build_node_metrics(node, [], UsageSample(node_name="n1", cpu="1", memory="1G"))
    assert "quantities" not in metrics.model_dump()


async def test_calculate_node_metrics_fetches_pods_and_usage():
    node = make_node("infra-1", {INFRA_LABEL: ""})
    inventory = FakeInventory(
        nodes=[node],
        pods={"infra-1": [make_pod("router", ContainerResources(cpu_request="2", memory_request="4G"))]},
        usage={"infra-1": UsageSample(node_name="infra-1", cpu="750m", memory="3G")},
    )

    metrics = await calculate_node_metrics(inventory, node)

    assert inventory.pod_calls == ["infra-1"]
    assert inventory.usage_calls == ["infra-1"]
    assert metrics.node_type == NodeType.INFRA
    assert metrics.requested_cpu == "2.00"
    assert metrics.requested_memory == "4Gi"
    assert metrics.used_cpu == "0.75"
    assert metrics.used_memory == "3Gi"


async def test_usage_failure_is_not_zeroed():
    node = make_node("n1")
    inventory = FakeInventory(nodes=[node], failing_usage={"n1"})
    with pytest.raises(InventoryError) as excinfo:
        await calculate_node_metrics(inventory, node)
    assert excinfo.value.node_name == "n1"


async def test_invalid_usage_quantity_raises():
    node = make_node("n1")
    inventory = FakeInventory(nodes=[node], usage={"n1": UsageSample(node_name="n1", cpu="fast", memory="1G")})
    with pytest.raises(QuantityParseError):
        await calculate_node_metrics(inventory, node)
