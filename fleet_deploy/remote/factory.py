"""Remote shell factory"""

from typing import Any, Callable, Dict, Optional, Type

from .base import RemoteShell
from .local import LocalShell, SshShell
from .pretend import PretendShell

LOCAL_HOSTS = ("local", "localhost", "127.0.0.1")


class ShellFactory:
    """Factory for creating the shell of a target"""

    def __init__(self, pretend: bool = False):
        self.pretend = pretend

    def create(self,
               credentials: Optional[Dict[str, Any]],
               paths=None,
               current_release: Optional[Callable[[], Optional[int]]] = None) -> RemoteShell:
        """Create a shell for one server

        Args:
            credentials: Server credentials
            paths: Folder layout on the server
            current_release: Returns the release to run commands in

        Returns:
            Shell instance
        """
        shell_class = self.get_shell_class(credentials or {})
        return shell_class(credentials, paths, current_release)

    def get_shell_class(self, credentials: Dict[str, Any]) -> Type[RemoteShell]:
        if self.pretend:
            return PretendShell
        if credentials.get("host") in LOCAL_HOSTS:
            return LocalShell
        return SshShell
