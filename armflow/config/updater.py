"""YAML settings updater."""
from pathlib import Path
from typing import Any

import yaml

from .settings import Settings

class SettingsUpdater:
    """Updates YAML settings files in-place."""

    @staticmethod
    def update_field(file_path: str, field_path: str, value: Any) -> Settings:
        """Update one settings field using dot notation.

        The file and any missing section are created. The result is validated
        before it is written back.

        Args:
            file_path: Path to the YAML settings file.
            field_path: Dot-separated path to the field (e.g., "layout.orientation").
            value: New value to set. Strings are parsed as YAML scalars or lists.

        Returns:
            Settings: The validated settings after the update.

        Raises:
            KeyError: If the field path does not name a settings field.
            ValidationError: If the new value is invalid.
            yaml.YAMLError: If the YAML is malformed.
        """
        path = Path(file_path)
        data = {}
        if path.exists():
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}

        if isinstance(value, str):
            value = yaml.safe_load(value) if value.strip() else value

        parts = field_path.split('.')
        defaults = Settings().model_dump()
        current, known = data, defaults
        for part in parts[:-1]:
            if not isinstance(known, dict) or part not in known:
                raise KeyError(f"Field path '{field_path}' is invalid at '{part}'")
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
            known = known[part]

        if not isinstance(known, dict) or parts[-1] not in known:
            raise KeyError(f"Field path '{field_path}' is invalid at '{parts[-1]}'")
        current[parts[-1]] = value

        settings = Settings.model_validate(data)

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(data, f, sort_keys=False)
        return settings
