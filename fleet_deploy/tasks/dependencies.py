"""Dependencies task"""

from .base import Task
from ..constants import StrategyFamily


class DependenciesTask(Task):
    """Installs or updates the dependencies of the current release"""

    name = "dependencies"
    description = "Install or update the dependencies"

    syncs_releases = True
    requires_release = True

    def execute(self):
        strategy = self.context.strategies.build_configured(StrategyFamily.DEPENDENCIES)
        if strategy is None:
            return "No dependencies to install"

        if self.context.option("update"):
            self.logger.info(f"Updating dependencies on {self.context.handle}")
            return strategy.update()

        self.logger.info(f"Installing dependencies on {self.context.handle}")
        return strategy.install()
