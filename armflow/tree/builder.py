"""Dependency tree pipeline: template resources to a positioned forest."""
from typing import Optional, Sequence

from ..config.settings import Settings
from ..layout.engine import LayoutEngine
from ..template.schema import Resource
from .forest import collect_roots, flatten, tree_edges
from .indexer import build_index
from .models import ResourceGraph
from .resolver import DependencyResolver
from .strategies import StrategyRegistry

class DependencyTreeBuilder:
    """Builds resource graphs from template resources."""

    def __init__(self, settings: Optional[Settings] = None, debug: bool = False):
        """Initialize the builder.

        Args:
            settings: Resolver and layout settings. Defaults to ``Settings()``.
            debug: If True, print verbose debug information.

        Raises:
            ValueError: If the settings name an unknown matching strategy.
        """
        self.settings = settings or Settings()
        self.debug = debug
        registry = StrategyRegistry(self.settings.resolver.keyword_hints)
        self.strategies = registry.create_all(self.settings.resolver.strategies)

    def build(self, resources: Sequence[Resource]) -> ResourceGraph:
        """Resolve dependencies and lay out the resulting forest.

        Each call works on fresh nodes; nothing is shared between calls.

        Args:
            resources: Resources in template declaration order.

        Returns:
            ResourceGraph: Roots, pre-order nodes, edges and the resolution log.
        """
        resources = list(resources or [])
        index = build_index(resources)

        resolver = DependencyResolver(self.strategies, debug=self.debug)
        has_parent = resolver.resolve(resources, index)

        roots = collect_roots(index, has_parent, self.settings.layout.root_order)
        LayoutEngine(self.settings.layout, debug=self.debug).layout(roots)

        if self.debug:
            print(f"Debug: Built forest with {len(roots)} root(s) from {len(resources)} resource(s)")

        return ResourceGraph(
            roots=roots,
            nodes=flatten(roots),
            edges=tree_edges(roots),
            resolutions=resolver.resolutions,
        )

def build_resource_graph(resources: Sequence[Resource], settings: Optional[Settings] = None,
                         debug: bool = False) -> ResourceGraph:
    """Run index, resolve, root collection and layout in one call."""
    return DependencyTreeBuilder(settings, debug=debug).build(resources)
