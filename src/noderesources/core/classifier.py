# src/noderesources/core/classifier.py
"""
Node type classification and node-type filtering.

Both work on the ``node-role.kubernetes.io/<role>`` labels, but they are
separate views: the filter only checks that the label key is present, while
the classifier also requires an empty label value and reports a single role
by fixed priority. A node can therefore be selected by the ``infra`` filter
and still be classified ``unknown``.
"""

from typing import Mapping, Union

from ..models.resources import NodeType, NodeTypeFilter
from .exceptions import InvalidNodeTypeError

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"

# Highest priority first.
CLASSIFICATION_ORDER = (NodeType.WORKER, NodeType.MASTER, NodeType.INFRA)


def role_label(role: str) -> str:
    """Return the label key for a node role, e.g. 'node-role.kubernetes.io/worker'."""
    return f"{ROLE_LABEL_PREFIX}{role}"


def classify_node(labels: Mapping[str, str] | None) -> NodeType:
    """Return the first role (worker, master, infra) whose label is present with an empty value."""
    labels = labels or {}
    for node_type in CLASSIFICATION_ORDER:
        key = role_label(node_type.value)
        if key in labels and labels[key] == "":
            return node_type
    return NodeType.UNKNOWN


def parse_node_type_filter(value: Union[str, NodeTypeFilter, None]) -> NodeTypeFilter:
    """
    Validate a node-type filter string.

    Raises:
        InvalidNodeTypeError: If the value is not one of all, worker, master, infra.
    """
    if isinstance(value, NodeTypeFilter):
        return value
    try:
        return NodeTypeFilter((value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(f.value for f in NodeTypeFilter)
        raise InvalidNodeTypeError(f"Invalid node type '{value}'. Use one of: {allowed}.") from None


def matches_filter(labels: Mapping[str, str] | None, node_type: NodeTypeFilter) -> bool:
    """True when the filter is 'all' or the node carries the filter's role label, whatever its value."""
    if node_type == NodeTypeFilter.ALL:
        return True
    return role_label(node_type.value) in (labels or {})
