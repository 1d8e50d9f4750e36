"""Shared data models for template diagrams."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

@dataclass
class DiagramNode:
    """Diagram node definition."""
    id: str
    kind: str
    data: Dict[str, Any]
    x: float
    y: float
    width: float
    height: float

@dataclass
class DiagramEdge:
    """Diagram edge definition."""
    id: str
    source: str
    target: str
    kind: str

@dataclass
class Diagram:
    """Complete template diagram."""
    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)

    def node(self, node_id: str) -> DiagramNode:
        """Return the node with the given id.

        Raises:
            KeyError: If no node has that id.
        """
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def bounds(self) -> Dict[str, float]:
        """Bounding box covering every node, centre coordinates included."""
        if not self.nodes:
            return {"min_x": 0.0, "min_y": 0.0, "max_x": 0.0, "max_y": 0.0}
        return {
            "min_x": min(n.x - n.width / 2 for n in self.nodes),
            "min_y": min(n.y - n.height / 2 for n in self.nodes),
            "max_x": max(n.x + n.width / 2 for n in self.nodes),
            "max_y": max(n.y + n.height / 2 for n in self.nodes),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the diagram to a JSON friendly structure."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "type": n.kind,
                    "data": n.data,
                    "position": {"x": n.x, "y": n.y},
                    "size": {"width": n.width, "height": n.height},
                } for n in self.nodes
            ],
            "edges": [
                {"id": e.id, "source": e.source, "target": e.target, "type": e.kind}
                for e in self.edges
            ],
        }
