"""Forest assembly and traversal helpers."""
from typing import Iterator, List, Set, Tuple

from .models import Edge, ResourceIndex, ResourceNode

ROOT_ORDERS = ("declaration", "type-name")

def collect_roots(index: ResourceIndex, has_parent: Set[str], order: str = "declaration") -> List[ResourceNode]:
    """Return every node that did not receive a parent.

    Args:
        index: Lookup tables of the current pass.
        has_parent: Ids of nodes linked under a parent.
        order: ``declaration`` keeps template order; ``type-name`` groups
            roots by type, then name, with declaration order breaking ties.

    Raises:
        ValueError: If ``order`` is not a known root ordering.
    """
    if order not in ROOT_ORDERS:
        raise ValueError(f"Unknown root order '{order}'. Expected one of {ROOT_ORDERS}")

    roots = [node for node in index.nodes if node.id not in has_parent]
    if order == "type-name":
        roots.sort(key=lambda node: (node.type.lower(), node.name.lower(), node.index))
    return roots

def walk(roots: List[ResourceNode]) -> Iterator[Tuple[ResourceNode, int]]:
    """Yield ``(node, depth)`` pairs in pre-order."""
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))

def flatten(roots: List[ResourceNode]) -> List[ResourceNode]:
    """Flatten the forest in pre-order."""
    return [node for node, _ in walk(roots)]

def tree_edges(roots: List[ResourceNode]) -> List[Edge]:
    """Generate one edge per parent/child link, in pre-order of the parent."""
    return [
        Edge(id=f"{node.id}-{child.id}", source=node.id, target=child.id)
        for node, _ in walk(roots)
        for child in node.children
    ]
