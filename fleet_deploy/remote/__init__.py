"""Shells running commands on deployment targets"""

from .base import CommandResult, RemoteShell
from .local import LocalShell, SshShell
from .pretend import PretendShell
from .factory import ShellFactory

__all__ = [
    "CommandResult",
    "RemoteShell",
    "LocalShell",
    "SshShell",
    "PretendShell",
    "ShellFactory",
]
