# tests/conftest.py

import pytest

from factories import INFRA_LABEL, MASTER_LABEL, WORKER_LABEL, FakeInventory, make_node, make_pod  # noqa: F401
from noderesources.models.resources import ContainerResources, UsageSample


@pytest.fixture
def e2e_inventory():
    """Two workers and one master; each worker runs one pod with one container."""
    nodes = [
        make_node("worker-b", {WORKER_LABEL: ""}, cpu="4", memory="16G"),
        make_node("master-a", {MASTER_LABEL: ""}, cpu="4", memory="16G"),
        make_node("worker-a", {WORKER_LABEL: ""}, cpu="4", memory="16G"),
    ]
    container = ContainerResources(
        name="app", cpu_request="500m", memory_request="256Mi", cpu_limit="1", memory_limit="512Mi"
    )
    pods = {
        "worker-a": [make_pod("web-1", container)],
        "worker-b": [make_pod("web-2", container)],
        "master-a": [make_pod("etcd", ContainerResources(name="etcd", cpu_request="100m"), namespace="kube-system")],
    }
    usage = {name: UsageSample(node_name=name, cpu="200m", memory="100Mi") for name in ("worker-a", "worker-b")}
    usage["master-a"] = UsageSample(node_name="master-a", cpu="1", memory="4G")
    return FakeInventory(nodes=nodes, pods=pods, usage=usage)


@pytest.fixture
def worker_metrics(e2e_inventory):
    """ClusterMetrics of the two workers of e2e_inventory, built without the event loop."""
    from noderesources.core.cluster_aggregator import fold_cluster_metrics
    from noderesources.core.node_aggregator import build_node_metrics
    from noderesources.models.resources import NodeTypeFilter

    inv = e2e_inventory
    node_metrics = [
        build_node_metrics(node, inv.pods[node.name], inv.usage[node.name])
        for node in inv.nodes
        if WORKER_LABEL in node.labels
    ]
    return fold_cluster_metrics(node_metrics, NodeTypeFilter.WORKER)
