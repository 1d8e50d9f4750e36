"""Resource lookup tables for dependency resolution."""
from typing import Dict, List, Sequence

from ..template.schema import Resource
from .models import ResourceIndex, ResourceNode

UNKNOWN_TYPE = "Unknown"

def build_index(resources: Sequence[Resource]) -> ResourceIndex:
    """Create one node per resource and index them by name and by type.

    Names are indexed as declared, unevaluated expressions included. A later
    resource reusing a name replaces the earlier one in ``by_name``; both stay
    reachable through ``by_type``.

    Args:
        resources: Resources in template declaration order.

    Returns:
        ResourceIndex: Fresh lookup tables owned by the caller.
    """
    nodes: List[ResourceNode] = []
    by_name: Dict[str, ResourceNode] = {}
    by_type: Dict[str, List[ResourceNode]] = {}

    for index, resource in enumerate(resources or []):
        node = ResourceNode(
            id=f"resource-{index}",
            index=index,
            name=resource.name or f"Resource {index}",
            type=resource.type or UNKNOWN_TYPE,
            location=resource.location,
            properties=resource.properties,
        )
        nodes.append(node)
        by_name[node.name] = node
        by_type.setdefault(node.type, []).append(node)

    return ResourceIndex(nodes=nodes, by_name=by_name, by_type=by_type)
