"""Chef server API client.

Maps Chef server collections onto typed resources with CRUD semantics and
selects an administrative connector (SSH or WinRM) for remote hosts.
"""

from .config import ChefAPIConfig, ConnectionConfig, ConnectorConfig, load_chefapi_config
from .connection import Connection
from .connector import (
    DEFAULT_SSH_PORT,
    DEFAULT_WINRM_PORT,
    Connector,
    ConnectorPort,
    ConnectorSelector,
    best_connector_for,
)
from .errors import (
    ChefAPIError,
    ConfigError,
    HTTPConflict,
    HTTPError,
    HTTPNotFound,
    InvalidResource,
    UnknownConnector,
)
from .resources import (
    ApiClient,
    Environment,
    Node,
    Resource,
    ResourceClient,
    ResourceType,
    Role,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ChefAPIConfig",
    "ChefAPIError",
    "ConfigError",
    "Connection",
    "ConnectionConfig",
    "Connector",
    "ConnectorConfig",
    "ConnectorPort",
    "ConnectorSelector",
    "DEFAULT_SSH_PORT",
    "DEFAULT_WINRM_PORT",
    "Environment",
    "HTTPConflict",
    "HTTPError",
    "HTTPNotFound",
    "InvalidResource",
    "Node",
    "Resource",
    "ResourceClient",
    "ResourceType",
    "Role",
    "UnknownConnector",
    "best_connector_for",
]
