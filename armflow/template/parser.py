"""ARM template JSON parser."""
import json
from typing import Any, Dict

from .schema import ArmTemplate

class TemplateParser:
    """Parser for ARM deployment template files."""

    @staticmethod
    def load(file_path: str) -> ArmTemplate:
        """Load and validate an ARM template file.

        Args:
            file_path: Path to the template JSON file.

        Returns:
            ArmTemplate: Validated template object.

        Raises:
            FileNotFoundError: If the template file doesn't exist.
            ValidationError: If the template is invalid.
            json.JSONDecodeError: If the JSON is malformed.
        """
        with open(file_path, 'r', encoding='utf-8-sig') as f:
            data = json.load(f)
        return TemplateParser.from_dict(data)

    @staticmethod
    def loads(text: str) -> ArmTemplate:
        """Parse and validate an ARM template from a JSON string."""
        return TemplateParser.from_dict(json.loads(text))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ArmTemplate:
        """Validate an already decoded template document.

        Raises:
            ValidationError: If the document lacks a schema identifier or
                any field has the wrong shape.
        """
        return ArmTemplate.model_validate(data)
