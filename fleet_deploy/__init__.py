"""fleet-deploy - Multi-host deployment orchestration.

Resolves which connections, servers and stages a command targets, keeps
their credentials, runs per-runtime strategies and tracks the releases of
every target.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .core import Application, TargetContext, TargetResolver, CredentialStore, ReleaseController
from .services.queue_executor import TaskQueue, TaskQueueExecutor

# Data models
from .models import Target, QueueResult, TargetResult, TaskResult, RollbackResult

# Exceptions
from .api.exceptions import (
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
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Application",
    "TargetContext",
    "TargetResolver",
    "CredentialStore",
    "ReleaseController",
    "TaskQueue",
    "TaskQueueExecutor",

    # Data models
    "Target",
    "QueueResult",
    "TargetResult",
    "TaskResult",
    "RollbackResult",

    # Exceptions
    "FleetDeployError",
    "ConnectionError",
    "CredentialMissingError",
    "ConfigError",
    "StrategyNotFoundError",
    "TaskNotFoundError",
    "RemoteCommandError",
    "PluginError",
]
