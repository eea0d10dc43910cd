from .base_inventory import InventoryProvider
from .kubernetes_inventory import KubernetesInventory

__all__ = [
    "InventoryProvider",
    "KubernetesInventory",
]
