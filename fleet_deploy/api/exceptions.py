"""Exception definitions for fleet-deploy"""

from typing import Iterable, Optional

from ..constants import ErrorCode


class FleetDeployError(Exception):
    """Base exception for fleet-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConnectionError(FleetDeployError):
    """None of the requested connections is valid"""

    def __init__(self, connections: Iterable[str]):
        self.connections = list(connections)
        message = f"Invalid connection(s): {', '.join(self.connections)}"
        super().__init__(message, ErrorCode.INVALID_CONNECTION)


class CredentialMissingError(FleetDeployError):
    """Credentials required by a target or the repository are missing"""

    def __init__(self, subject: str, fields: Iterable[str]):
        self.subject = subject
        self.fields = list(fields)
        message = f"Missing credentials for {subject}: {', '.join(self.fields)}"
        super().__init__(message, ErrorCode.CREDENTIALS_MISSING)


class ConfigError(FleetDeployError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class StrategyNotFoundError(FleetDeployError):
    """No strategy registered for a family/name pair"""

    def __init__(self, family: str, name: str):
        message = f"Strategy not found: {family}:{name}"
        super().__init__(message, ErrorCode.STRATEGY_NOT_FOUND)
        self.family = family
        self.name = name


class TaskNotFoundError(FleetDeployError):
    """No task registered under a name"""

    def __init__(self, name: str):
        message = f"Task not found: {name}"
        super().__init__(message, ErrorCode.TASK_NOT_FOUND)
        self.name = name


class RemoteCommandError(FleetDeployError):
    """The shell transport itself failed (not a non-zero exit status)"""

    def __init__(self, command: str, reason: Optional[str] = None):
        message = f"Unable to run command: {command}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorCode.REMOTE_COMMAND_FAILED)
        self.command = command


class PluginError(FleetDeployError):
    """A plugin package could not be installed"""

    def __init__(self, package: str, reason: Optional[str] = None):
        message = f"Unable to install plugin {package}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, ErrorCode.PLUGIN_ERROR)
        self.package = package
