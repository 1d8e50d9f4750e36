"""Dependency resolution: dependsOn entries to parent/child edges."""
from typing import List, Optional, Sequence, Set

from ..template.schema import Resource
from .expressions import parse_reference
from .models import ParsedReference, Resolution, ResourceIndex, ResourceNode
from .strategies import MatchStrategy, StrategyRegistry

class DependencyResolver:
    """Links each resource under the first resource it depends on.

    Strategies are tried in order and the first hit wins. A node keeps the
    first parent it is linked to, and an edge that would make a node its own
    ancestor is dropped, so the result is always a forest.
    """

    def __init__(self, strategies: Optional[Sequence[MatchStrategy]] = None, debug: bool = False):
        """Initialize the resolver.

        Args:
            strategies: Matching strategies in the order they are tried.
                Defaults to exact, type-scoped, global and keyword matching.
            debug: If True, print verbose debug information.
        """
        self.strategies = list(strategies) if strategies is not None else StrategyRegistry().create_all()
        self.debug = debug
        self.resolutions: List[Resolution] = []

    def resolve(self, resources: Sequence[Resource], index: ResourceIndex) -> Set[str]:
        """Append children to parents across the index's nodes.

        Args:
            resources: Resources in the order used to build ``index``.
            index: Lookup tables for this pass; node child lists are mutated.

        Returns:
            Set[str]: Ids of nodes that received a parent.
        """
        self.resolutions = []
        has_parent: Set[str] = set()

        for resource, node in zip(resources or [], index.nodes):
            for dep in resource.depends_on:
                self.resolutions.append(self._resolve_dependency(dep, node, index, has_parent))

        if self.debug:
            linked = sum(1 for r in self.resolutions if r.outcome == "linked")
            print(f"Debug: Resolved {linked} of {len(self.resolutions)} dependencies")

        return has_parent

    def _resolve_dependency(self, dep: str, node: ResourceNode, index: ResourceIndex,
                            has_parent: Set[str]) -> Resolution:
        reference = parse_reference(dep)
        if reference is None:
            if self.debug:
                print(f"Debug: Could not parse dependency of {node.name}: {dep}")
            return Resolution(node.id, dep, "unparsable")

        parent, strategy = self._find_parent(reference, node, index)
        if parent is None:
            if self.debug:
                print(f"Debug: Could not resolve dependency of {node.name}: "
                      f"{reference.resource_type} -> {reference.resource_name}")
            outcome = "self" if self._is_self_reference(reference, node) else "unresolved"
            return Resolution(node.id, dep, outcome, reference)

        if any(child is node for child in parent.children):
            return Resolution(node.id, dep, "duplicate", reference, parent.id, strategy)

        if node.id in has_parent:
            if self.debug:
                print(f"Debug: {node.name} already has a parent, ignoring {parent.name}")
            return Resolution(node.id, dep, "has-parent", reference, parent.id, strategy)

        if _reaches(node, parent):
            if self.debug:
                print(f"Debug: Linking {node.name} under {parent.name} would create a cycle")
            return Resolution(node.id, dep, "cycle", reference, parent.id, strategy)

        parent.children.append(node)
        has_parent.add(node.id)
        if self.debug:
            print(f"Debug: {node.name} depends on {parent.name} ({strategy} match)")
        return Resolution(node.id, dep, "linked", reference, parent.id, strategy)

    def _find_parent(self, reference: ParsedReference, node: ResourceNode, index: ResourceIndex):
        for strategy in self.strategies:
            parent = strategy.find_parent(reference, node, index)
            if parent is not None and parent is not node:
                return parent, strategy.name
        return None, None

    @staticmethod
    def _is_self_reference(reference: ParsedReference, node: ResourceNode) -> bool:
        return reference.resource_name == node.name and reference.resource_type == node.type

def _reaches(start: ResourceNode, target: ResourceNode) -> bool:
    """True when ``target`` is ``start`` or one of its descendants."""
    stack = [start]
    while stack:
        current = stack.pop()
        if current is target:
            return True
        stack.extend(current.children)
    return False

def resolve(resources: Sequence[Resource], index: ResourceIndex,
            strategies: Optional[Sequence[MatchStrategy]] = None, debug: bool = False) -> Set[str]:
    """Resolve dependencies with a throwaway resolver and return the has-parent set."""
    return DependencyResolver(strategies, debug=debug).resolve(resources, index)
