"""Parent matching strategies for dependsOn references."""
import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .models import ParsedReference, ResourceIndex, ResourceNode

_ARM_SYNTAX_RE = re.compile(r"[\[\]'\"()]")

DEFAULT_KEYWORD_HINTS: Dict[str, List[str]] = {
    "Microsoft.Network/publicIPAddresses": ["publicip", "public"],
    "Microsoft.Network/virtualNetworks": ["vnet", "virtualnetwork"],
}

def clean_name(name: str) -> str:
    """Strip ARM syntax characters and lower-case a name."""
    return _ARM_SYNTAX_RE.sub("", name or "").lower()

def names_overlap(declared: str, referenced: str) -> bool:
    """Substring test in either direction on cleaned names."""
    cleaned_declared = clean_name(declared)
    cleaned_referenced = clean_name(referenced)
    if not cleaned_declared or not cleaned_referenced:
        return False
    return cleaned_referenced in cleaned_declared or cleaned_declared in cleaned_referenced

def _first(candidates: Iterable[ResourceNode], node: ResourceNode, predicate) -> Optional[ResourceNode]:
    for candidate in candidates:
        if candidate is not node and predicate(candidate):
            return candidate
    return None

class MatchStrategy(ABC):
    """Base class for a single parent lookup strategy."""

    name = ""

    @abstractmethod
    def find_parent(self, reference: ParsedReference, node: ResourceNode,
                    index: ResourceIndex) -> Optional[ResourceNode]:
        """Find the parent a reference points to.

        Args:
            reference: Parsed dependsOn entry of ``node``.
            node: The dependent node; never returned as its own parent.
            index: Lookup tables for the current pass.

        Returns:
            The first matching node in declaration order, or None.
        """
        pass

class ExactNameStrategy(MatchStrategy):
    """Exact lookup of the referenced name."""

    name = "exact"

    def find_parent(self, reference, node, index):
        candidate = index.by_name.get(reference.resource_name)
        if candidate is None or candidate is node:
            return None
        return candidate

class TypeScopedStrategy(MatchStrategy):
    """Substring match within the referenced type bucket."""

    name = "type"

    def find_parent(self, reference, node, index):
        candidates = index.by_type.get(reference.resource_type, [])
        return _first(candidates, node,
                      lambda candidate: names_overlap(candidate.name, reference.resource_name))

class GlobalScanStrategy(MatchStrategy):
    """Scan every node, comparing resource types case-insensitively."""

    name = "global"

    def find_parent(self, reference, node, index):
        wanted_type = reference.resource_type.lower()
        return _first(index.nodes, node,
                      lambda candidate: candidate.type.lower() == wanted_type
                      and names_overlap(candidate.name, reference.resource_name))

class KeywordHintStrategy(MatchStrategy):
    """Naming-convention fallback for common network types."""

    name = "keyword"

    def __init__(self, keyword_hints: Optional[Mapping[str, Sequence[str]]] = None):
        """Initialize the strategy.

        Args:
            keyword_hints: Resource type to keywords accepted in a candidate's
                lower-cased name.
        """
        hints = DEFAULT_KEYWORD_HINTS if keyword_hints is None else keyword_hints
        self.keyword_hints = {rtype: [k.lower() for k in keywords] for rtype, keywords in hints.items()}

    def find_parent(self, reference, node, index):
        keywords = self.keyword_hints.get(reference.resource_type)
        if keywords is None:
            return None
        wanted = reference.resource_name.lower()

        def matches(candidate: ResourceNode) -> bool:
            lowered = candidate.name.lower()
            return any(keyword in lowered for keyword in keywords) or wanted in lowered

        return _first(index.by_type.get(reference.resource_type, []), node, matches)

STRATEGY_TYPES = {
    ExactNameStrategy.name: ExactNameStrategy,
    TypeScopedStrategy.name: TypeScopedStrategy,
    GlobalScanStrategy.name: GlobalScanStrategy,
    KeywordHintStrategy.name: KeywordHintStrategy,
}

DEFAULT_STRATEGY_ORDER = [
    ExactNameStrategy.name,
    TypeScopedStrategy.name,
    GlobalScanStrategy.name,
    KeywordHintStrategy.name,
]

class StrategyRegistry:
    """Builds strategy instances from configured names."""

    def __init__(self, keyword_hints: Optional[Mapping[str, Sequence[str]]] = None):
        self.keyword_hints = keyword_hints

    def create(self, name: str) -> MatchStrategy:
        """Create the strategy registered under ``name``.

        Raises:
            ValueError: If no strategy has that name.
        """
        strategy_type = STRATEGY_TYPES.get(name)
        if strategy_type is None:
            raise ValueError(f"Unknown matching strategy '{name}'. Available: {sorted(STRATEGY_TYPES)}")
        if strategy_type is KeywordHintStrategy:
            return KeywordHintStrategy(self.keyword_hints)
        return strategy_type()

    def create_all(self, names: Optional[Sequence[str]] = None) -> List[MatchStrategy]:
        """Create strategies in the given order, defaulting to exact, type, global, keyword."""
        return [self.create(name) for name in (names or DEFAULT_STRATEGY_ORDER)]
