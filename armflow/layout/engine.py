"""Tree layout: levels, subtree sizes and coordinates for a resource forest."""
from typing import Dict, List, Optional

from ..config.settings import LayoutSettings
from ..tree.forest import flatten, walk
from ..tree.models import ResourceNode

class LayoutEngine:
    """Places a forest on a canvas, top-down or left-to-right.

    Every subtree owns a band on the secondary axis (x for top-down, y for
    left-to-right) that is ``subtree_size`` slots wide. Leaves sit at the
    centre of their slot and a parent sits at the mean of its children, so
    sibling subtrees never overlap. Positions are node centres.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None, debug: bool = False):
        """Initialize the engine.

        Args:
            settings: Layout configuration. Defaults to ``LayoutSettings()``.
            debug: If True, print verbose debug information.
        """
        self.settings = settings or LayoutSettings()
        self.debug = debug

    @property
    def slot(self) -> float:
        """Width of one sibling slot on the secondary axis."""
        extent = self.settings.node_width if self.settings.orientation == "top-down" else self.settings.node_height
        return extent + self.settings.sibling_spacing

    @property
    def level_step(self) -> float:
        """Distance between consecutive levels on the primary axis."""
        if self.settings.level_spacing is not None:
            return self.settings.level_spacing
        extent = self.settings.node_height if self.settings.orientation == "top-down" else self.settings.node_width
        return extent + self.settings.level_gap

    def layout(self, roots: List[ResourceNode]) -> float:
        """Assign level, subtree size and position to every reachable node.

        Args:
            roots: Forest roots, laid out side by side in the given order.

        Returns:
            float: Total extent used on the secondary axis.
        """
        origin = self._secondary_origin()
        cursor = origin
        for i, root in enumerate(roots):
            if i:
                cursor += self.settings.tree_spacing
            size = self._measure(root)
            if self.debug:
                print(f"Debug: Root {root.name} spans {size} slot(s)")
            self._place(root, cursor)
            cursor += size * self.slot
        return cursor - origin

    def _measure(self, root: ResourceNode) -> int:
        # Reversed pre-order visits every child before its parent.
        for node in reversed(flatten([root])):
            child_total = sum(child.subtree_size for child in node.children)
            if self.settings.size_by == "nodes":
                node.subtree_size = 1 + child_total
            else:
                node.subtree_size = max(1, child_total)
        return root.subtree_size

    def _place(self, root: ResourceNode, offset: float) -> None:
        bands: Dict[int, float] = {id(root): offset}
        order: List[ResourceNode] = []
        for node, level in walk([root]):
            node.level = level
            order.append(node)
            child_total = sum(child.subtree_size for child in node.children)
            cursor = bands[id(node)] + (node.subtree_size - child_total) * self.slot / 2
            for child in node.children:
                bands[id(child)] = cursor
                cursor += child.subtree_size * self.slot

        for node in reversed(order):
            if node.children:
                secondary = sum(self._secondary(child) for child in node.children) / len(node.children)
            else:
                secondary = bands[id(node)] + node.subtree_size * self.slot / 2
            self._set_position(node, node.level, secondary)

    def _secondary_origin(self) -> float:
        if self.settings.orientation == "top-down":
            return self.settings.origin_x
        return self.settings.origin_y

    def _secondary(self, node: ResourceNode) -> float:
        return node.position.x if self.settings.orientation == "top-down" else node.position.y

    def _set_position(self, node: ResourceNode, level: int, secondary: float) -> None:
        if self.settings.orientation == "top-down":
            node.position.x = secondary
            node.position.y = self.settings.origin_y + level * self.level_step
        else:
            node.position.x = self.settings.origin_x + level * self.level_step
            node.position.y = secondary

def layout(roots: List[ResourceNode], settings: Optional[LayoutSettings] = None) -> float:
    """Lay out a forest with a throwaway engine."""
    return LayoutEngine(settings).layout(roots)
