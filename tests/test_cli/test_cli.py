"""Tests for the CLI commands."""
import json
import pytest
import yaml
from rich.console import Console
from rich.tree import Tree
from typer.testing import CliRunner
from armflow.tree.models import ResourceNode
from main import _add_branch, app

runner = CliRunner()

SCHEMA = "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#"

@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich tables from wrapping in captured output."""
    monkeypatch.setattr("main.console", Console(width=200))

@pytest.fixture
def template_path(tmp_path):
    """Write a small template to disk."""
    template = {
        "$schema": SCHEMA,
        "resources": [
            {"name": "vnet1", "type": "Microsoft.Network/virtualNetworks"},
            {"name": "subnet1", "type": "Microsoft.Network/subnets",
             "dependsOn": ["[resourceId('Microsoft.Network/virtualNetworks', 'vnet1')]"]},
            {"name": "site", "type": "Microsoft.Web/sites",
             "dependsOn": ["[resourceId('Microsoft.Web/serverfarms', 'plan')]"]}
        ]
    }
    path = tmp_path / "azuredeploy.json"
    path.write_text(json.dumps(template))
    return path

def test_tree(template_path):
    """Test printing the dependency forest."""
    result = runner.invoke(app, ["tree", str(template_path)])
    assert result.exit_code == 0
    assert "vnet1" in result.output
    assert "subnet1" in result.output
    assert "3 resources, 2 roots, 1 edges" in result.output

def test_dependencies_unresolved_only(template_path):
    """Test listing only unresolved entries."""
    result = runner.invoke(app, ["dependencies", str(template_path), "--unresolved-only"])
    assert result.exit_code == 0
    assert "unresolved" in result.output
    assert "linked" not in result.output

def test_layout_left_right(template_path):
    """Test the layout table with an orientation override."""
    result = runner.invoke(app, ["layout", str(template_path), "--orientation", "left-right"])
    assert result.exit_code == 0
    assert "resource-1" in result.output
    assert "300" in result.output

def test_export_refuses_overwrite(template_path, tmp_path):
    """Test export and the --force guard."""
    out_dir = tmp_path / "out"
    result = runner.invoke(app, ["export", str(template_path), "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    assert (out_dir / "diagram.json").exists()
    assert (out_dir / "diagram.svg").exists()

    result = runner.invoke(app, ["export", str(template_path), "--output-dir", str(out_dir)])
    assert result.exit_code == 1
    assert "already exist" in result.output

    result = runner.invoke(app, ["export", str(template_path), "--output-dir", str(out_dir), "--force"])
    assert result.exit_code == 0

def test_config_set(tmp_path, template_path):
    """Test updating settings and using them."""
    config_path = tmp_path / "armflow.yaml"
    result = runner.invoke(app, ["config-set", "layout.orientation", "left-right", "--config", str(config_path)])
    assert result.exit_code == 0
    assert yaml.safe_load(config_path.read_text())["layout"]["orientation"] == "left-right"

    result = runner.invoke(app, ["config-set", "layout.nope", "1", "--config", str(config_path)])
    assert result.exit_code == 1

def test_missing_template():
    """Test a nonexistent template file."""
    result = runner.invoke(app, ["tree", "nonexistent.json"])
    assert result.exit_code == 1
    assert "Error" in result.output

def test_add_branch_keeps_child_order():
    """Test that sibling branches follow the forest order."""
    leaves = [ResourceNode(id=f"resource-{i}", index=i, name=f"leaf{i}", type="Microsoft.Web/sites")
              for i in (2, 3)]
    middle = ResourceNode(id="resource-1", index=1, name="middle", type="Microsoft.Web/sites",
                          children=leaves)
    root = ResourceNode(id="resource-0", index=0, name="top", type="Microsoft.Web/serverfarms",
                        children=[middle])
    tree = Tree("template")
    _add_branch(tree, root)

    top = tree.children[0]
    assert "top" in str(top.label)
    assert "middle" in str(top.children[0].label)
    assert ["leaf2" in str(c.label) for c in top.children[0].children] == [True, False]
    assert "leaf3" in str(top.children[0].children[1].label)
