"""Git operation utilities"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


class GitScm:
    """Builds the git commands fleet-deploy needs"""

    binary = "git"

    def current_branch(self) -> str:
        """Command printing the checked out branch"""
        return f"{self.binary} rev-parse --abbrev-ref HEAD"


def run_local(command: Union[str, List[str]], cwd: Optional[Path] = None) -> List[str]:
    """
    Run a command on this machine and return its output lines

    Args:
        command: Command line or argument list
        cwd: Working directory

    Returns:
        Output lines, empty if the command could not run
    """
    args = shlex.split(command) if isinstance(command, str) else command
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        logger.debug(f"Local command failed: {command} ({e})")
        return []

    return result.stdout.splitlines()
