# src/noderesources/collectors/kubernetes_inventory.py
"""
Cluster inventory backed by the Kubernetes API (core/v1) and the
metrics.k8s.io aggregated API for live node usage.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from kubernetes_asyncio import client
from kubernetes_asyncio.client.rest import ApiException

from ..core.config import config as global_config
from ..core.exceptions import InventoryError
from ..core.k8s_client import get_api_client
from ..models.resources import ContainerResources, NodeRecord, PodRecord, UsageSample
from .base_inventory import InventoryProvider

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"
METRICS_NODES_PLURAL = "nodes"


def _describe_api_error(e: ApiException) -> str:
    return f"HTTP {e.status} {e.reason}".strip()


class KubernetesInventory(InventoryProvider):
    """Lists nodes and pods and reads node usage from a live cluster."""

    def __init__(self, kubeconfig: Optional[str] = None, request_timeout: Optional[float] = None):
        self.kubeconfig = kubeconfig
        self.request_timeout = global_config.K8S_REQUEST_TIMEOUT if request_timeout is None else request_timeout
        self._api_client = None
        self._core_api = None
        self._custom_api = None
        self._init_lock = asyncio.Lock()

    async def _ensure_client(self):
        """
        Lazily initialize the Kubernetes Async clients using the centralized thread-safe loader.
        Concurrent first calls share a single ApiClient.
        """
        if self._api_client:
            return

        async with self._init_lock:
            if self._api_client:
                return
            api_client = await get_api_client(self.kubeconfig)
            self._core_api = client.CoreV1Api(api_client)
            self._custom_api = client.CustomObjectsApi(api_client)
            self._api_client = api_client
            logger.debug("KubernetesInventory initialized.")

    def _call_kwargs(self) -> Dict[str, Any]:
        if self.request_timeout:
            return {"_request_timeout": self.request_timeout}
        return {}

    async def list_nodes(self) -> List[NodeRecord]:
        await self._ensure_client()
        try:
            nodes = await self._core_api.list_node(watch=False, **self._call_kwargs())
        except ApiException as e:
            raise InventoryError("list_nodes", _describe_api_error(e)) from e
        except Exception as e:
            raise InventoryError("list_nodes", str(e)) from e

        records = [self._to_node_record(node) for node in nodes.items or []]
        logger.info("Listed %d nodes from the cluster.", len(records))
        return records

    async def list_pods(self, node_name: str) -> List[PodRecord]:
        await self._ensure_client()
        try:
            pod_list = await self._core_api.list_pod_for_all_namespaces(
                watch=False,
                field_selector=f"spec.nodeName={node_name}",
                **self._call_kwargs(),
            )
        except ApiException as e:
            raise InventoryError("list_pods", _describe_api_error(e), node_name=node_name) from e
        except Exception as e:
            raise InventoryError("list_pods", str(e), node_name=node_name) from e

        pods = [self._to_pod_record(pod) for pod in pod_list.items or []]
        logger.debug("Listed %d pods on node '%s'.", len(pods), node_name)
        return pods

    async def get_usage(self, node_name: str) -> UsageSample:
        await self._ensure_client()
        try:
            node_metrics = await self._custom_api.get_cluster_custom_object(
                METRICS_GROUP,
                METRICS_VERSION,
                METRICS_NODES_PLURAL,
                node_name,
                **self._call_kwargs(),
            )
        except ApiException as e:
            raise InventoryError("get_usage", _describe_api_error(e), node_name=node_name) from e
        except Exception as e:
            raise InventoryError("get_usage", str(e), node_name=node_name) from e

        usage = (node_metrics or {}).get("usage") or {}
        cpu, memory = usage.get("cpu"), usage.get("memory")
        if cpu is None or memory is None:
            raise InventoryError("get_usage", "metrics response has no cpu/memory usage", node_name=node_name)
        return UsageSample(node_name=node_name, cpu=str(cpu), memory=str(memory))

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api_client:
            await self._api_client.close()
            logger.debug("KubernetesInventory Kubernetes client closed.")
            self._api_client = None
            self._core_api = None
            self._custom_api = None

    @staticmethod
    def _to_node_record(node) -> NodeRecord:
        capacity = (getattr(node, "status", None) and node.status.capacity) or {}
        cpu, memory = capacity.get("cpu"), capacity.get("memory")
        return NodeRecord(
            name=node.metadata.name,
            labels=dict(node.metadata.labels or {}),
            cpu_capacity=str(cpu) if cpu is not None else None,
            memory_capacity=str(memory) if memory is not None else None,
        )

    @staticmethod
    def _to_pod_record(pod) -> PodRecord:
        containers = []
        for container in (pod.spec and pod.spec.containers) or []:
            resources = container.resources
            requests = (resources and resources.requests) or {}
            limits = (resources and resources.limits) or {}
            containers.append(
                ContainerResources(
                    name=container.name,
                    cpu_request=_optional_str(requests.get("cpu")),
                    memory_request=_optional_str(requests.get("memory")),
                    cpu_limit=_optional_str(limits.get("cpu")),
                    memory_limit=_optional_str(limits.get("memory")),
                )
            )
        return PodRecord(name=pod.metadata.name, namespace=pod.metadata.namespace, containers=containers)


def _optional_str(value) -> Optional[str]:
    return None if value is None else str(value)
