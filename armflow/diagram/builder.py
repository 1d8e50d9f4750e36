"""Template diagram builder."""
from typing import Optional

from ..config.settings import Settings
from ..template.schema import ArmTemplate
from ..tree.builder import DependencyTreeBuilder
from ..tree.models import ResourceGraph
from .models import Diagram, DiagramEdge, DiagramNode

ROOT_ID = "root-template"
PARAMETERS_ID = "category-parameters"
RESOURCES_ID = "category-resources"

# Fixed placement of the template, category and parameter nodes
LAYOUT_CONFIG = {
    "root_position": (600, 50),
    "category_spacing": 500,
    "category_y_offset": 200,
    "parameter_spacing": 140,
    "resource_y_offset": 180,
    "template_size": (240, 100),
    "category_size": (180, 60),
    "parameter_size": (180, 70),
}

class DiagramBuilder:
    """Builds a full diagram for an ARM template.

    The template node fans out to a parameters category, which chains every
    parameter below it, and a resources category, under which the resolved
    resource forest is laid out.
    """

    def __init__(self, settings: Optional[Settings] = None, debug: bool = False):
        """Initialize the builder.

        Args:
            settings: Resolver and layout settings. Defaults to ``Settings()``.
            debug: If True, print verbose debug information.
        """
        self.settings = settings or Settings()
        self.debug = debug
        self.graph: Optional[ResourceGraph] = None

    def build(self, template: ArmTemplate) -> Diagram:
        """Build the diagram for a template.

        Args:
            template: Validated ARM template.

        Returns:
            Diagram: Positioned nodes and edges. The resource graph used for
            the resource section is kept on ``self.graph``.
        """
        diagram = Diagram()
        root_x, root_y = LAYOUT_CONFIG["root_position"]
        width, height = LAYOUT_CONFIG["template_size"]
        diagram.nodes.append(DiagramNode(
            id=ROOT_ID,
            kind="template",
            data={
                "name": "ARM Template",
                "schema": template.schema_,
                "contentVersion": template.content_version,
                "parameterCount": len(template.parameters),
                "resourceCount": len(template.resources),
            },
            x=root_x, y=root_y, width=width, height=height,
        ))

        if template.parameters:
            self._add_parameters(diagram, template)

        self.graph = None
        if template.resources:
            self._add_resources(diagram, template)

        if self.debug:
            print(f"Debug: Diagram has {len(diagram.nodes)} nodes and {len(diagram.edges)} edges")
        return diagram

    def _category_position(self, side: int):
        root_x, root_y = LAYOUT_CONFIG["root_position"]
        return (root_x + side * LAYOUT_CONFIG["category_spacing"] / 2,
                root_y + LAYOUT_CONFIG["category_y_offset"])

    def _add_parameters(self, diagram: Diagram, template: ArmTemplate) -> None:
        cat_x, cat_y = self._category_position(-1)
        width, height = LAYOUT_CONFIG["category_size"]
        diagram.nodes.append(DiagramNode(
            id=PARAMETERS_ID,
            kind="category",
            data={"name": "Parameters", "count": len(template.parameters), "category": "parameters"},
            x=cat_x, y=cat_y, width=width, height=height,
        ))
        diagram.edges.append(DiagramEdge("root-to-parameters", ROOT_ID, PARAMETERS_ID, "parameter"))

        width, height = LAYOUT_CONFIG["parameter_size"]
        previous_id = PARAMETERS_ID
        for i, (name, definition) in enumerate(template.parameters.items(), start=1):
            param_id = f"param-{name}"
            diagram.nodes.append(DiagramNode(
                id=param_id,
                kind="parameter",
                data={
                    "name": name,
                    "type": definition.type or "unknown",
                    "description": definition.description,
                    "defaultValue": definition.default_value,
                },
                x=cat_x, y=cat_y + LAYOUT_CONFIG["parameter_spacing"] * i,
                width=width, height=height,
            ))
            diagram.edges.append(DiagramEdge(f"{previous_id}-{param_id}", previous_id, param_id, "parameter"))
            previous_id = param_id

    def _add_resources(self, diagram: Diagram, template: ArmTemplate) -> None:
        cat_x, cat_y = self._category_position(1)
        width, height = LAYOUT_CONFIG["category_size"]
        diagram.nodes.append(DiagramNode(
            id=RESOURCES_ID,
            kind="category",
            data={"name": "Resources", "count": len(template.resources), "category": "resources"},
            x=cat_x, y=cat_y, width=width, height=height,
        ))
        diagram.edges.append(DiagramEdge("root-to-resources", ROOT_ID, RESOURCES_ID, "resource"))

        layout_settings = self.settings.layout
        forest_top = cat_y + LAYOUT_CONFIG["resource_y_offset"]
        if layout_settings.orientation == "top-down":
            origin = {"origin_x": cat_x - layout_settings.node_width / 2, "origin_y": forest_top}
        else:
            origin = {"origin_x": cat_x, "origin_y": forest_top}
        settings = self.settings.model_copy(update={"layout": layout_settings.model_copy(update=origin)})

        self.graph = DependencyTreeBuilder(settings, debug=self.debug).build(template.resources)

        for node in self.graph.nodes:
            diagram.nodes.append(DiagramNode(
                id=node.id,
                kind="resource",
                data={
                    "name": node.name,
                    "type": node.type,
                    "location": node.location,
                    "properties": node.properties,
                    "level": node.level,
                },
                x=node.position.x, y=node.position.y,
                width=layout_settings.node_width, height=layout_settings.node_height,
            ))
        for edge in self.graph.edges:
            diagram.edges.append(DiagramEdge(edge.id, edge.source, edge.target, "dependency"))
        for root in self.graph.roots:
            diagram.edges.append(DiagramEdge(f"{RESOURCES_ID}-{root.id}", RESOURCES_ID, root.id, "resource"))
