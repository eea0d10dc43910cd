class NodeResourcesError(Exception):
    """Base exception for cluster-node-resources."""

    pass


class QuantityParseError(NodeResourcesError, ValueError):
    """Raised when a resource quantity string is not a valid Kubernetes quantity."""

    def __init__(self, quantity, reason: str = "not a valid quantity"):
        self.quantity = quantity
        super().__init__(f"Cannot parse resource quantity {quantity!r}: {reason}")


class InventoryError(NodeResourcesError):
    """Raised when listing nodes/pods or fetching a usage sample fails."""

    def __init__(self, operation: str, detail: str, node_name: str | None = None):
        self.operation = operation
        self.node_name = node_name
        target = f" for node '{node_name}'" if node_name else ""
        super().__init__(f"Inventory call '{operation}' failed{target}: {detail}")


class ConfigurationFault(NodeResourcesError):
    """Raised when required cluster data or client configuration is missing."""

    pass


class InvalidNodeTypeError(NodeResourcesError, ValueError):
    """Raised when a node-type filter is not one of the supported values."""

    pass
