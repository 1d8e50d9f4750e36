"""ARM template diagram CLI entrypoint."""
import typer
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree
from typing import Optional

from armflow.config.settings import LayoutSettings, Settings, SettingsLoader
from armflow.config.updater import SettingsUpdater
from armflow.diagram.builder import DiagramBuilder
from armflow.diagram.exporter import DiagramExporter
from armflow.template.parser import TemplateParser
from armflow.tree.builder import DependencyTreeBuilder

app = typer.Typer(help="armflow - Dependency diagrams for Azure ARM templates")
console = Console()

def _load_settings(config: Optional[str], orientation: Optional[str] = None) -> Settings:
    settings = SettingsLoader.load(config)
    if orientation:
        layout = LayoutSettings.model_validate({**settings.layout.model_dump(), "orientation": orientation})
        settings = settings.model_copy(update={"layout": layout})
    return settings

def _add_branch(tree: Tree, root) -> None:
    stack = [(tree, root)]
    while stack:
        parent, node = stack.pop()
        branch = parent.add(f"[bold]{escape(node.name)}[/] [dim]{escape(node.type)}[/]")
        stack.extend((branch, child) for child in reversed(node.children))

@app.command("tree")
def show_tree(
    template: str = typer.Argument(..., help="Path to the ARM template JSON file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to the settings YAML file"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information during resolution")
):
    """Show the resource dependency forest."""
    try:
        arm_template = TemplateParser.load(template)
        graph = DependencyTreeBuilder(_load_settings(config), debug=debug).build(arm_template.resources)

        tree = Tree(f"[bold blue]{Path(template).name}[/]")
        for root in graph.roots:
            _add_branch(tree, root)
        console.print(tree)
        console.print(f"[green]{len(graph.nodes)} resources, {len(graph.roots)} roots, {len(graph.edges)} edges[/]")
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

@app.command("dependencies")
def dependencies(
    template: str = typer.Argument(..., help="Path to the ARM template JSON file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to the settings YAML file"),
    unresolved_only: bool = typer.Option(False, "--unresolved-only", help="Only list entries that produced no edge")
):
    """List every dependsOn entry and how it was resolved."""
    try:
        arm_template = TemplateParser.load(template)
        graph = DependencyTreeBuilder(_load_settings(config)).build(arm_template.resources)
        names = {node.id: node.name for node in graph.nodes}

        table = Table(title="Dependency Resolution")
        table.add_column("Resource", style="cyan")
        table.add_column("Type")
        table.add_column("Name")
        table.add_column("Outcome")
        table.add_column("Parent", style="green")
        table.add_column("Strategy")

        for resolution in graph.resolutions:
            if unresolved_only and resolution.linked:
                continue
            reference = resolution.reference
            style = "green" if resolution.linked else "red"
            table.add_row(
                escape(names.get(resolution.resource_id, resolution.resource_id)),
                escape(reference.resource_type) if reference else "",
                escape(reference.resource_name if reference else resolution.expression),
                f"[{style}]{resolution.outcome}[/]",
                escape(names.get(resolution.parent_id, "")) if resolution.parent_id else "",
                resolution.strategy or "",
            )
        console.print(table)
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

@app.command("layout")
def show_layout(
    template: str = typer.Argument(..., help="Path to the ARM template JSON file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to the settings YAML file"),
    orientation: Optional[str] = typer.Option(None, "--orientation", help="Override layout orientation (top-down or left-right)")
):
    """Show computed levels and positions of every resource."""
    try:
        arm_template = TemplateParser.load(template)
        graph = DependencyTreeBuilder(_load_settings(config, orientation)).build(arm_template.resources)

        table = Table(title="Resource Layout")
        table.add_column("Id", style="cyan")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Level", justify="right")
        table.add_column("X", justify="right")
        table.add_column("Y", justify="right")
        for node in graph.nodes:
            table.add_row(node.id, escape(node.name), escape(node.type), str(node.level),
                          f"{node.position.x:g}", f"{node.position.y:g}")
        console.print(table)
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

@app.command("export")
def export(
    template: str = typer.Argument(..., help="Path to the ARM template JSON file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to the settings YAML file"),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", "-o", help="Directory for exported files"),
    name: str = typer.Option("diagram", "--name", "-n", help="Base name of the exported files"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing export files"),
    debug: bool = typer.Option(False, "--debug", help="Print verbose debug information")
):
    """Export the template diagram as JSON and SVG."""
    console.print("[bold blue]Exporting diagram...[/]")

    try:
        exporter = DiagramExporter(output_dir or str(Path(template).parent), debug=debug)
        existing_files = exporter.existing_files(name)
        if existing_files and not force:
            existing_files_str = ", ".join(str(f) for f in existing_files)
            console.print(f"[bold yellow]WARNING: Export files already exist: {existing_files_str}[/]")
            console.print("[yellow]Use --force to overwrite existing files.[/]")
            raise typer.Exit(code=1)

        arm_template = TemplateParser.load(template)
        diagram = DiagramBuilder(_load_settings(config), debug=debug).build(arm_template)
        json_path, svg_path = exporter.export(diagram, name)

        console.print(f"[green]Diagram JSON written to {json_path}[/]")
        console.print(f"[green]Diagram SVG written to {svg_path}[/]")
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

@app.command("config-set")
def config_set(
    key: str = typer.Argument(..., help="Dotted settings key, e.g. layout.orientation"),
    value: str = typer.Argument(..., help="New value (parsed as YAML)"),
    config: str = typer.Option("armflow.yaml", "--config", "-c", help="Path to the settings YAML file")
):
    """Update one key in the settings file."""
    try:
        SettingsUpdater.update_field(config, key, value)
        console.print(f"[green]Set {key} = {value} in {config}[/]")
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/]")
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
