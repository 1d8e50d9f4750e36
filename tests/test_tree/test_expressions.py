"""Tests for resourceId() expression parsing."""
import pytest
from armflow.tree.expressions import parse_reference, resolve_name_expression
from armflow.tree.models import ParsedReference

def test_literal_name():
    """Test a literal resource name."""
    ref = parse_reference("[resourceId('Microsoft.Network/virtualNetworks', 'vnet1')]")
    assert ref == ParsedReference("Microsoft.Network/virtualNetworks", "vnet1")

def test_variable_indirection():
    """Test unwrapping variables() in the name argument."""
    ref = parse_reference(
        "[resourceId('Microsoft.Network/networkSecurityGroups', variables('networkSecurityGroupName'))]"
    )
    assert ref.resource_type == "Microsoft.Network/networkSecurityGroups"
    assert ref.resource_name == "networkSecurityGroupName"

def test_parameter_indirection():
    """Test unwrapping parameters() in the name argument."""
    ref = parse_reference("[resourceId('Microsoft.Compute/virtualMachines', parameters('env'))]")
    assert ref.resource_name == "env"

def test_only_one_level_is_unwrapped():
    """Nested expressions resolve to the first inner variable only."""
    ref = parse_reference(
        "[resourceId('Microsoft.Web/sites', concat(variables('prefix'), '-app'))]"
    )
    assert ref.resource_type == "Microsoft.Web/sites"
    assert ref.resource_name == "prefix"

def test_whitespace_is_tolerated():
    """Test extra whitespace around arguments."""
    ref = parse_reference("[resourceId(  'Microsoft.Storage/storageAccounts' ,   'store1' )]")
    assert ref == ParsedReference("Microsoft.Storage/storageAccounts", "store1")

def test_resource_id_inside_other_call():
    """Test a resourceId() call wrapped by concat()."""
    ref = parse_reference("[concat(resourceId('Microsoft.Network/networkInterfaces', 'nic1'), '/extra')]")
    assert ref == ParsedReference("Microsoft.Network/networkInterfaces", "nic1")

def test_resource_id_nested_in_extension_call():
    """Test the inner resourceId() of an extensionResourceId() call."""
    ref = parse_reference(
        "[extensionResourceId(resourceId('Microsoft.Storage/storageAccounts','store1'), "
        "'Microsoft.Authorization/locks', 'lock1')]"
    )
    assert ref == ParsedReference("Microsoft.Storage/storageAccounts", "store1")

@pytest.mark.parametrize("expr", [
    "[resourceId('Microsoft.Network/virtualNetworks/subnets', 'vnet', 'subnet')]",
    "[resourceId('Microsoft.Network/virtualNetworks')]",
    "[resourceId('Microsoft.Network/virtualNetworks', 'vnet1'",
    "[variables('vnetName')]",
    "[subscriptionResourceId('Microsoft.Authorization/roleDefinitions', 'abc')]",
    "[tenantResourceId('Microsoft.Management/managementGroups', 'mg1')]",
    "[ResourceId('Microsoft.Network/virtualNetworks', 'vnet1')]",
    "vnet1",
    "",
    None,
])
def test_unparsable_expressions(expr):
    """Test inputs that are not two-argument resourceId() calls."""
    assert parse_reference(expr) is None

def test_resolve_name_expression_literal():
    """Test unquoting a plain literal."""
    assert resolve_name_expression("'storage'") == "storage"
    assert resolve_name_expression("variables('x')") == "x"
