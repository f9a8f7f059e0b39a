"""Plugin package installer"""

import logging
import subprocess
import sys

from ..api.exceptions import PluginError

logger = logging.getLogger(__name__)


class PluginInstaller:
    """Installs plugin packages with pip into the running environment

    The commands always run on this machine, never on the servers.
    """

    def __init__(self, python: str = sys.executable):
        self.python = python

    def install(self, package: str) -> None:
        """
        Install a plugin package

        Args:
            package: Requirement specifier, as pip accepts it

        Raises:
            PluginError: If pip fails or cannot run
        """
        command = [self.python, "-m", "pip", "install", package]
        logger.info(f"Installing {package}")
        logger.debug(f"$ {' '.join(command)}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise PluginError(package, str(e))

        if result.returncode != 0:
            lines = result.stderr.strip().splitlines()
            raise PluginError(package, lines[-1] if lines else f"pip exited with {result.returncode}")

        logger.info(f"Installed {package}")
