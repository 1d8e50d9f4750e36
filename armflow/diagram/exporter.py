"""Diagram export to JSON and SVG."""
import json
from pathlib import Path
from typing import List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader

from .models import Diagram

PADDING = 40

class DiagramExporter:
    """Writes diagrams to an output directory."""

    def __init__(self, output_dir: str, debug: bool = False):
        """Initialize the exporter.

        Args:
            output_dir: Directory for exported files. Created if missing.
            debug: If True, print verbose debug information.
        """
        self.output_dir = Path(output_dir)
        self.debug = debug

        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True
        )

    def paths(self, name: str = "diagram") -> Tuple[Path, Path]:
        """Return the JSON and SVG paths an export with ``name`` writes."""
        return self.output_dir / f"{name}.json", self.output_dir / f"{name}.svg"

    def existing_files(self, name: str = "diagram") -> List[Path]:
        """Return export targets that already exist."""
        return [path for path in self.paths(name) if path.exists()]

    def export(self, diagram: Diagram, name: str = "diagram") -> Tuple[str, str]:
        """Write the diagram as JSON and as SVG.

        Args:
            diagram: Diagram to export.
            name: Base file name without extension.

        Returns:
            Tuple[str, str]: Paths to the JSON and SVG files.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        json_path, svg_path = self.paths(name)

        json_path.write_text(json.dumps(diagram.to_dict(), indent=2, default=str))
        svg_path.write_text(self.render_svg(diagram))

        if self.debug:
            print(f"Debug: Diagram JSON written to {json_path}")
            print(f"Debug: Diagram SVG written to {svg_path}")

        return str(json_path), str(svg_path)

    def render_svg(self, diagram: Diagram, title: Optional[str] = None) -> str:
        """Render the diagram to an SVG document."""
        bounds = diagram.bounds()
        centres = {node.id: (node.x, node.y) for node in diagram.nodes}
        lines = [
            {"kind": edge.kind, "start": centres[edge.source], "end": centres[edge.target]}
            for edge in diagram.edges
            if edge.source in centres and edge.target in centres
        ]
        template = self.jinja_env.get_template("diagram.svg.j2")
        return template.render(
            title=title or "ARM template diagram",
            nodes=diagram.nodes,
            lines=lines,
            view_x=bounds["min_x"] - PADDING,
            view_y=bounds["min_y"] - PADDING,
            width=bounds["max_x"] - bounds["min_x"] + 2 * PADDING,
            height=bounds["max_y"] - bounds["min_y"] + 2 * PADDING,
        )
