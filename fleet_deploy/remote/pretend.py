"""Shell recording commands instead of running them"""

from typing import List

from .base import CommandResult, RemoteShell


class PretendShell(RemoteShell):
    """Shows which commands would run without doing anything

    Every command succeeds with an empty output.
    """

    pretend = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.history: List[str] = []

    def _execute(self, command: str) -> CommandResult:
        self.history.append(command)
        self.logger.info(f"[pretend] {command}")
        return CommandResult(command=command)
