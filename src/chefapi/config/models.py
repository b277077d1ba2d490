"""Pydantic models for chefapi configuration."""

from pydantic import BaseModel, Field, field_validator


class ConnectionConfig(BaseModel):
    """Connection settings for a Chef server.

    Attributes:
        server_url: Base URL of the Chef server API (e.g. "https://chef.example.com").
        client_name: Name of the API client making requests.
        organization: Organization name; when set, every request path is
            prefixed with ``organizations/<organization>``.
        thread_count: Worker pool size for bulk operations such as delete_all.
        timeout: Timeout in seconds for each request.
        ssl_verify: Verify the server's TLS certificate.
        api_version: Value sent in the X-Chef-Version header.
    """

    server_url: str
    client_name: str = ""
    organization: str | None = None
    thread_count: int = Field(default=8, ge=1)
    timeout: float = Field(default=30.0, gt=0.0)
    ssl_verify: bool = True
    api_version: str = "11.4.0"

    @field_validator("server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("server_url must not be empty")
        return value.rstrip("/")


class ConnectorConfig(BaseModel):
    """Ports and timeout used when probing a host for an admin connector."""

    ssh_port: int = Field(default=22, ge=1, le=65535)
    winrm_port: int = Field(default=5985, ge=1, le=65535)
    timeout: float = Field(default=3.0, gt=0.0)


class ChefAPIConfig(BaseModel):
    """Top-level configuration file layout."""

    connection: ConnectionConfig
    connector: ConnectorConfig = Field(default_factory=ConnectorConfig)
