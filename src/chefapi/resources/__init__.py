"""Typed resources mapped onto Chef server collections."""

from .api_client import ApiClient
from .attributes import AttributeMap
from .base import Reference, Resource, ResourceType, chef_id_of
from .environment import Environment
from .node import Node
from .resource_client import ResourceClient
from .role import Role

__all__ = [
    "ApiClient",
    "AttributeMap",
    "Environment",
    "Node",
    "Reference",
    "Resource",
    "ResourceClient",
    "ResourceType",
    "Role",
    "chef_id_of",
]
