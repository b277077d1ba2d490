"""Node resources (``/nodes``)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .base import Resource, ResourceType


class NodeSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    chef_environment: str = "_default"
    automatic: dict[str, Any] = Field(default_factory=dict)
    normal: dict[str, Any] = Field(default_factory=dict)
    default: dict[str, Any] = Field(default_factory=dict)
    override: dict[str, Any] = Field(default_factory=dict)
    run_list: list[str] = Field(default_factory=list)


class Node(Resource):
    resource_type = ResourceType(
        chef_type="node",
        chef_id="name",
        json_class="Chef::Node",
        schema=NodeSchema,
    )

    @property
    def public_hostname(self) -> str | None:
        """Hostname reported by ohai, preferring the cloud public hostname."""
        automatic = self["automatic"] or {}
        cloud = automatic.get("cloud") or {}
        return cloud.get("public_hostname") or automatic.get("fqdn")

    @property
    def public_ipv4(self) -> str | None:
        """IPv4 address reported by ohai, preferring the cloud public address."""
        automatic = self["automatic"] or {}
        cloud = automatic.get("cloud") or {}
        return cloud.get("public_ipv4") or automatic.get("ipaddress")
