"""Configuration models and YAML loading."""

from .loader import load_chefapi_config, load_config, load_yaml
from .models import ChefAPIConfig, ConnectionConfig, ConnectorConfig

__all__ = [
    "ChefAPIConfig",
    "ConnectionConfig",
    "ConnectorConfig",
    "load_chefapi_config",
    "load_config",
    "load_yaml",
]
