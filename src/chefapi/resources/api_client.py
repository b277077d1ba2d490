"""API client resources (``/clients``)."""

from pydantic import BaseModel, ConfigDict

from .base import Resource, ResourceType


class ApiClientSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    admin: bool = False
    validator: bool = False
    certificate: str | None = None
    public_key: str | None = None
    private_key: str | bool | None = None


class ApiClient(Resource):
    """A client registered with the Chef server."""

    resource_type = ResourceType(
        chef_type="client",
        chef_id="name",
        json_class="Chef::ApiClient",
        schema=ApiClientSchema,
    )
