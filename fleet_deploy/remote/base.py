"""Remote shell abstract base class"""

import logging
import posixpath
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union


@dataclass
class CommandResult:
    """Output and exit status of a command"""
    command: str
    output: str = ""
    status: int = 0

    @property
    def success(self) -> bool:
        return self.status == 0

    def lines(self) -> List[str]:
        """Non-empty output lines, stripped"""
        return [line.strip() for line in self.output.splitlines() if line.strip()]


class RemoteShell(ABC):
    """Base class for every way of running commands on a target"""

    # Commands are only recorded, their output means nothing
    pretend: bool = False

    def __init__(self,
                 credentials: Optional[Dict[str, Any]] = None,
                 paths=None,
                 current_release: Optional[Callable[[], Optional[int]]] = None):
        """
        Initialize shell

        Args:
            credentials: Credentials of the target server
            paths: Folder layout of the application on the target
            current_release: Returns the release commands should run in
        """
        self.credentials = credentials or {}
        self.paths = paths
        self._current_release = current_release
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def _execute(self, command: str) -> CommandResult:
        """Run one command line on the target"""
        pass

    def run(self, commands: Union[str, List[str]], cwd: Optional[str] = None) -> CommandResult:
        """
        Run one or more commands, stopping at the first failure

        Args:
            commands: Command or list of commands
            cwd: Folder to run the commands in

        Returns:
            Combined result
        """
        if isinstance(commands, str):
            commands = [commands]
        if cwd:
            commands = [f"cd {shlex.quote(cwd)}"] + list(commands)

        command = " && ".join(commands)
        self.logger.debug(f"$ {command}")

        return self._execute(command)

    ##################################################################
    # Releases
    ##################################################################

    def get_current_release_folder(self, path: Optional[str] = None) -> Optional[str]:
        """Folder of the release commands run in"""
        release = self._current_release() if self._current_release else None
        if release is None or self.paths is None:
            return None
        return self.paths.get_release_folder(release, path)

    def run_for_current_release(self, commands: Union[str, List[str]]) -> CommandResult:
        """Run commands inside the current release folder"""
        return self.run(commands, cwd=self.get_current_release_folder())

    def share(self, path: str) -> CommandResult:
        """
        Keep a path of the current release in the shared folder

        The first release to share a path moves its copy there; later
        releases get a symlink.

        Args:
            path: Path relative to the release folder
        """
        release_path = shlex.quote(self.get_current_release_folder(path) or path)
        shared_path = shlex.quote(self.paths.get_shared_folder(path))
        shared_parent = shlex.quote(posixpath.dirname(self.paths.get_shared_folder(path)))

        self.logger.info(f"Sharing {path}")
        return self.run([
            f"mkdir -p {shared_parent}",
            f"if [ -e {release_path} ] && [ ! -e {shared_path} ]; then mv {release_path} {shared_path}; fi",
            f"mkdir -p {shared_path}",
            f"rm -rf {release_path}",
            f"ln -s {shared_path} {release_path}",
        ])

    ##################################################################
    # Filesystem helpers
    ##################################################################

    def symlink(self, target: str, link: str) -> CommandResult:
        """Point a symlink at a new target"""
        return self.run(f"ln -sfn {shlex.quote(target)} {shlex.quote(link)}")

    def which(self, binary: str) -> Optional[str]:
        """Path of a binary on the target, if installed"""
        result = self.run(f"command -v {shlex.quote(binary)}")
        lines = result.lines()
        return lines[0] if result.success and lines else None

    def file_exists(self, path: str) -> bool:
        return self.run(f"test -e {shlex.quote(path)}").success

    def read_file(self, path: str) -> Optional[str]:
        result = self.run(f"cat {shlex.quote(path)}")
        return result.output if result.success else None
