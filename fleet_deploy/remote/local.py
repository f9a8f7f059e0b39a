"""Shells backed by local processes"""

import subprocess
from typing import List

from .base import CommandResult, RemoteShell
from ..api.exceptions import RemoteCommandError


class LocalShell(RemoteShell):
    """Runs commands on this machine"""

    def _execute(self, command: str) -> CommandResult:
        args = self._build_args(command)
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True
            )
        except (OSError, ValueError) as e:
            raise RemoteCommandError(command, str(e))

        if result.returncode != 0 and result.stderr:
            self.logger.warning(result.stderr.strip())

        return CommandResult(command=command, output=result.stdout, status=result.returncode)

    def _build_args(self, command: str) -> List[str]:
        return ["sh", "-c", command]


class SshShell(LocalShell):
    """Runs commands on a remote host through the system ``ssh`` client"""

    def _build_args(self, command: str) -> List[str]:
        host = self.credentials.get("host")
        if not host:
            raise RemoteCommandError(command, "no host configured")

        args = ["ssh", "-o", "BatchMode=yes"]
        if self.credentials.get("port"):
            args += ["-p", str(self.credentials["port"])]
        if self.credentials.get("key"):
            args += ["-i", str(self.credentials["key"])]
        if self.credentials.get("agent"):
            args.append("-A")

        username = self.credentials.get("username")
        args.append(f"{username}@{host}" if username else host)
        args.append(command)

        return args
