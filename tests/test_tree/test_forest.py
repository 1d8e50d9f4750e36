"""Tests for forest assembly helpers."""
import pytest
from armflow.template.schema import Resource
from armflow.tree.forest import collect_roots, flatten, tree_edges
from armflow.tree.indexer import build_index

@pytest.fixture
def index():
    """Index with a small hand-linked forest."""
    resources = [
        Resource(name="web", type="Microsoft.Web/sites"),
        Resource(name="plan", type="Microsoft.Web/serverfarms"),
        Resource(name="db", type="Microsoft.Sql/servers"),
        Resource(name="alpha", type="Microsoft.Web/sites"),
    ]
    index = build_index(resources)
    web, plan, db, alpha = index.nodes
    plan.children.append(web)
    plan.children.append(alpha)
    return index

def test_roots_in_declaration_order(index):
    """Test default root ordering."""
    roots = collect_roots(index, {"resource-0", "resource-3"})
    assert [r.name for r in roots] == ["plan", "db"]

def test_roots_sorted_by_type_and_name(index):
    """Test grouping roots by type then name."""
    roots = collect_roots(index, set(), order="type-name")
    assert [r.name for r in roots] == ["db", "plan", "alpha", "web"]

def test_unknown_root_order(index):
    """Test rejecting an unknown ordering."""
    with pytest.raises(ValueError):
        collect_roots(index, set(), order="random")

def test_flatten_and_edges(index):
    """Test pre-order flattening and edge ids."""
    roots = collect_roots(index, {"resource-0", "resource-3"})
    assert [n.name for n in flatten(roots)] == ["plan", "web", "alpha", "db"]

    edges = tree_edges(roots)
    assert [e.id for e in edges] == ["resource-1-resource-0", "resource-1-resource-3"]
    assert edges[0].source == "resource-1"
    assert edges[0].target == "resource-0"

def test_empty_forest():
    """Test helpers on an empty forest."""
    assert flatten([]) == []
    assert tree_edges([]) == []
