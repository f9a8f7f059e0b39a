"""Public API for fleet-deploy"""

from .exceptions import (
    FleetDeployError,
    ConnectionError,
    CredentialMissingError,
    ConfigError,
    StrategyNotFoundError,
    TaskNotFoundError,
    RemoteCommandError,
    PluginError,
)

__all__ = [
    "FleetDeployError",
    "ConnectionError",
    "CredentialMissingError",
    "ConfigError",
    "StrategyNotFoundError",
    "TaskNotFoundError",
    "RemoteCommandError",
    "PluginError",
]
