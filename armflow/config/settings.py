"""Pydantic models and YAML loader for diagram settings."""
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..tree.strategies import DEFAULT_KEYWORD_HINTS, DEFAULT_STRATEGY_ORDER, STRATEGY_TYPES

class LayoutSettings(BaseModel):
    """Tree layout configuration."""
    orientation: Literal["top-down", "left-right"] = "top-down"
    size_by: Literal["leaves", "nodes"] = "leaves"
    root_order: Literal["declaration", "type-name"] = "declaration"
    node_width: float = Field(default=200, gt=0)
    node_height: float = Field(default=80, gt=0)
    sibling_spacing: float = Field(default=50, ge=0)
    level_spacing: Optional[float] = Field(default=None, gt=0)
    tree_spacing: float = Field(default=100, ge=0)
    level_gap: float = Field(default=100, ge=0)
    origin_x: float = 0
    origin_y: float = 0

class ResolverSettings(BaseModel):
    """Dependency matching configuration."""
    strategies: List[str] = Field(default_factory=lambda: list(DEFAULT_STRATEGY_ORDER))
    keyword_hints: Dict[str, List[str]] = Field(
        default_factory=lambda: {rtype: list(words) for rtype, words in DEFAULT_KEYWORD_HINTS.items()}
    )

    @field_validator('strategies')
    @classmethod
    def _known_strategies(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one matching strategy is required")
        unknown = [name for name in value if name not in STRATEGY_TYPES]
        if unknown:
            raise ValueError(f"unknown matching strategies {unknown}; available: {sorted(STRATEGY_TYPES)}")
        return value

class Settings(BaseModel):
    """Root settings schema."""
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)

class SettingsLoader:
    """Loader for YAML settings files."""

    @staticmethod
    def load(file_path: Optional[str] = None) -> Settings:
        """Load and validate a YAML settings file.

        Args:
            file_path: Path to the YAML settings file. None yields defaults.

        Returns:
            Settings: Validated settings object.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            ValidationError: If the settings are invalid.
            yaml.YAMLError: If the YAML is malformed.
        """
        if file_path is None:
            return Settings()
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
        return Settings.model_validate(data or {})
