"""Pydantic models for ARM template validation."""
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

class ParameterDefinition(BaseModel):
    """Template parameter definition."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: Optional[str] = None
    default_value: Any = Field(default=None, alias='defaultValue')
    allowed_values: Optional[List[Any]] = Field(default=None, alias='allowedValues')
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def description(self) -> str:
        """Description from the parameter metadata block."""
        return str(self.metadata.get("description") or "")

class Resource(BaseModel):
    """Resource entry as declared in the template."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: Optional[str] = None
    type: Optional[str] = None
    api_version: Optional[str] = Field(default=None, alias='apiVersion')
    location: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None
    depends_on: List[str] = Field(default_factory=list, alias='dependsOn')

    @field_validator('depends_on', mode='before')
    @classmethod
    def _keep_string_dependencies(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [dep for dep in value if isinstance(dep, str)]

class ArmTemplate(BaseModel):
    """Root ARM deployment template schema."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    schema_: str = Field(alias='$schema')
    content_version: Optional[str] = Field(default=None, alias='contentVersion')
    language_version: Optional[str] = Field(default=None, alias='languageVersion')
    parameters: Dict[str, ParameterDefinition] = Field(default_factory=dict)
    variables: Dict[str, Any] = Field(default_factory=dict)
    resources: List[Resource] = Field(default_factory=list)
    outputs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('parameters', 'variables', 'outputs', mode='before')
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator('resources', mode='before')
    @classmethod
    def _normalize_resources(cls, value: Any) -> Any:
        # languageVersion 2.0 templates declare resources keyed by symbolic name
        if value is None:
            return []
        if isinstance(value, dict):
            normalized: List[Union[Dict[str, Any], Any]] = []
            for symbolic_name, resource in value.items():
                if isinstance(resource, dict) and not resource.get("name"):
                    resource = {**resource, "name": symbolic_name}
                normalized.append(resource)
            return normalized
        return value
