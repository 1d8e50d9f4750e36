"""Data models for dependency tree resolution."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

@dataclass(frozen=True)
class ParsedReference:
    """Resource type and name recovered from a resourceId() expression."""
    resource_type: str
    resource_name: str

@dataclass
class Position:
    """Node coordinate on the diagram canvas."""
    x: float = 0.0
    y: float = 0.0

@dataclass(eq=False)
class ResourceNode:
    """Diagram node derived from one declared template resource.

    Nodes compare by identity; a parent's ``children`` list is the only place
    a child reference is held.
    """
    id: str
    index: int
    name: str
    type: str
    location: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None
    children: List["ResourceNode"] = field(default_factory=list)
    level: int = 0
    subtree_size: int = 1
    position: Position = field(default_factory=Position)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node without its children."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "location": self.location,
            "properties": self.properties,
            "level": self.level,
            "subtreeSize": self.subtree_size,
            "position": {"x": self.position.x, "y": self.position.y},
        }

@dataclass(frozen=True)
class Edge:
    """Directed parent to child edge."""
    id: str
    source: str
    target: str

@dataclass
class ResourceIndex:
    """Lookup tables built for a single resolution pass."""
    nodes: List[ResourceNode]
    by_name: Dict[str, ResourceNode]
    by_type: Dict[str, List[ResourceNode]]

@dataclass(frozen=True)
class Resolution:
    """How a single dependsOn entry was handled."""
    resource_id: str
    expression: str
    outcome: str
    reference: Optional[ParsedReference] = None
    parent_id: Optional[str] = None
    strategy: Optional[str] = None

    @property
    def linked(self) -> bool:
        """True when the entry produced (or repeated) a tree edge."""
        return self.outcome in ("linked", "duplicate")

@dataclass
class ResourceGraph:
    """Resolved and positioned dependency forest."""
    roots: List[ResourceNode]
    nodes: List[ResourceNode]
    edges: List[Edge]
    resolutions: List[Resolution] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize nodes and edges for a rendering collaborator."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [
                {"id": edge.id, "source": edge.source, "target": edge.target}
                for edge in self.edges
            ],
        }
