"""Environment resources (``/environments``)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .base import Resource, ResourceType


class EnvironmentSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(pattern=r"^[\w.\-]+$")
    description: str = ""
    default_attributes: dict[str, Any] = Field(default_factory=dict)
    override_attributes: dict[str, Any] = Field(default_factory=dict)
    cookbook_versions: dict[str, str] = Field(default_factory=dict)


class Environment(Resource):
    resource_type = ResourceType(
        chef_type="environment",
        chef_id="name",
        json_class="Chef::Environment",
        schema=EnvironmentSchema,
    )

    def set_default_attribute(self, key: str, value: Any) -> Any:
        """Set a nested default attribute using a dotted key ("app.port")."""
        self.attributes.merge({"default_attributes": _nest(key, value)})
        return value

    def set_override_attribute(self, key: str, value: Any) -> Any:
        """Set a nested override attribute using a dotted key ("app.port")."""
        self.attributes.merge({"override_attributes": _nest(key, value)})
        return value


def _nest(dotted_key: str, value: Any) -> dict[str, Any]:
    nested: Any = value
    for part in reversed(dotted_key.split(".")):
        nested = {part: nested}
    return nested
