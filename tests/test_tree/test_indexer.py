"""Tests for the resource indexer."""
from armflow.template.schema import Resource
from armflow.tree.indexer import build_index

def _resources(*entries):
    return [Resource.model_validate(entry) for entry in entries]

def test_nodes_created_in_declaration_order():
    """Test ids, names and defaults of indexed nodes."""
    index = build_index(_resources(
        {"name": "vnet1", "type": "Microsoft.Network/virtualNetworks", "location": "eastus"},
        {"type": "Microsoft.Network/subnets"},
        {"name": "[variables('nicName')]"},
    ))

    assert [n.id for n in index.nodes] == ["resource-0", "resource-1", "resource-2"]
    assert index.nodes[0].location == "eastus"
    assert index.nodes[1].name == "Resource 1"
    assert index.nodes[2].type == "Unknown"
    assert all(n.children == [] and n.level == 0 for n in index.nodes)
    assert index.by_name["[variables('nicName')]"] is index.nodes[2]
    assert index.by_name["Resource 1"] is index.nodes[1]

def test_type_buckets_keep_order():
    """Test grouping by resource type."""
    index = build_index(_resources(
        {"name": "a", "type": "Microsoft.Network/publicIPAddresses"},
        {"name": "b", "type": "Microsoft.Network/virtualNetworks"},
        {"name": "c", "type": "Microsoft.Network/publicIPAddresses"},
    ))
    assert [n.name for n in index.by_type["Microsoft.Network/publicIPAddresses"]] == ["a", "c"]
    assert [n.name for n in index.by_type["Microsoft.Network/virtualNetworks"]] == ["b"]

def test_name_collision_last_write_wins():
    """Test that a repeated name points at the later resource."""
    index = build_index(_resources(
        {"name": "shared", "type": "Microsoft.Web/sites"},
        {"name": "shared", "type": "Microsoft.Web/serverfarms"},
    ))
    assert index.by_name["shared"] is index.nodes[1]
    assert index.by_type["Microsoft.Web/sites"] == [index.nodes[0]]

def test_empty_resource_list():
    """Test indexing nothing."""
    index = build_index([])
    assert index.nodes == []
    assert index.by_name == {}
    assert index.by_type == {}
