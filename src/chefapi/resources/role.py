"""Role resources (``/roles``)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .base import Resource, ResourceType


class RoleSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(pattern=r"^[\w.\-]+$")
    description: str = ""
    default_attributes: dict[str, Any] = Field(default_factory=dict)
    override_attributes: dict[str, Any] = Field(default_factory=dict)
    run_list: list[str] = Field(default_factory=list)
    env_run_lists: dict[str, list[str]] = Field(default_factory=dict)


class Role(Resource):
    resource_type = ResourceType(
        chef_type="role",
        chef_id="name",
        json_class="Chef::Role",
        schema=RoleSchema,
    )
