"""ARM resourceId() expression parsing."""
import re
from typing import List, Optional

from .models import ParsedReference

_RESOURCE_ID_RE = re.compile(r"(?<![A-Za-z])resourceId\s*\(")
_VARIABLE_RE = re.compile(r"variables\s*\(\s*['\"]([^'\"]+)['\"]\s*\)", re.IGNORECASE)
_PARAMETER_RE = re.compile(r"parameters\s*\(\s*['\"]([^'\"]+)['\"]\s*\)", re.IGNORECASE)
_QUOTES = "'\""

def _unquote(value: str) -> str:
    return value.strip().strip(_QUOTES).strip()

def _call_arguments(text: str, start: int) -> Optional[str]:
    """Return the text between the parenthesis opened at ``start - 1`` and its match.

    Parentheses inside quoted literals are ignored. Returns None when the call
    is never closed.
    """
    depth = 1
    quote = None
    for pos in range(start, len(text)):
        char = text[pos]
        if quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return text[start:pos]
    return None

def _split_arguments(arguments: str) -> List[str]:
    """Split a call's argument list on top-level commas."""
    parts = []
    depth = 0
    quote = None
    current = []
    for char in arguments:
        if quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in '([':
            depth += 1
        elif char in ')]':
            depth -= 1
        elif char == ',' and depth == 0:
            parts.append(''.join(current))
            current = []
            continue
        current.append(char)
    parts.append(''.join(current))
    return parts

def resolve_name_expression(name_expr: str) -> str:
    """Unwrap one level of variables()/parameters() indirection.

    ``variables('vnetName')`` becomes ``vnetName``; a plain literal is
    returned unquoted. Deeper expressions such as concat() are not evaluated.
    """
    match = _VARIABLE_RE.search(name_expr) or _PARAMETER_RE.search(name_expr)
    if match:
        return match.group(1)
    return _unquote(name_expr)

def parse_reference(expr: str) -> Optional[ParsedReference]:
    """Extract the resource type and name from a resourceId() expression.

    The first two-argument ``resourceId()`` call wins. Other ``*ResourceId()``
    functions such as ``subscriptionResourceId()`` are not resource
    references, but a ``resourceId()`` nested inside them still is.

    Args:
        expr: Raw dependsOn entry, e.g.
            ``"[resourceId('Microsoft.Network/virtualNetworks', variables('vnetName'))]"``.

    Returns:
        ParsedReference, or None when the entry holds no two-argument
        resourceId() call.
    """
    if not isinstance(expr, str):
        return None

    cleaned = expr.strip().lstrip('[').rstrip(']').strip()
    for match in _RESOURCE_ID_RE.finditer(cleaned):
        reference = _parse_call(cleaned, match.end())
        if reference is not None:
            return reference
    return None

def _parse_call(text: str, start: int) -> Optional[ParsedReference]:
    arguments = _call_arguments(text, start)
    if arguments is None:
        return None

    parts = _split_arguments(arguments)
    if len(parts) != 2:
        return None

    resource_type = _unquote(parts[0])
    resource_name = resolve_name_expression(parts[1].strip())
    if not resource_type or not resource_name:
        return None

    return ParsedReference(resource_type=resource_type, resource_name=resource_name)
