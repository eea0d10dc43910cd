# src/noderesources/collectors/base_inventory.py
"""
This module defines the abstract base class for cluster inventory providers.
The aggregation engine only talks to this interface, so the Kubernetes
implementation can be swapped for a fake in tests or another backend.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.resources import NodeRecord, PodRecord, UsageSample


class InventoryProvider(ABC):
    """
    Abstract Base Class for cluster inventory sources.

    Every method may block on network I/O and raises InventoryError on failure.
    """

    @abstractmethod
    async def list_nodes(self) -> List[NodeRecord]:
        """List all nodes of the cluster."""
        pass

    @abstractmethod
    async def list_pods(self, node_name: str) -> List[PodRecord]:
        """List the pods scheduled on the given node, across all namespaces."""
        pass

    @abstractmethod
    async def get_usage(self, node_name: str) -> UsageSample:
        """Fetch the current usage sample of the given node."""
        pass

    async def close(self):
        """
        Clean up resources (e.g., close HTTP sessions or API clients).
        """
        pass
