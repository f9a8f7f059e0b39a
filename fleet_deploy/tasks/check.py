"""Check task"""

from .base import Task
from ..constants import StrategyFamily


class CheckTask(Task):
    """Checks that the server can receive the application"""

    name = "check"
    description = "Check if the server is ready to receive the application"

    syncs_releases = True
    requires_release = True

    def execute(self):
        strategy = self.context.strategies.build_configured(StrategyFamily.CHECK)
        if strategy is None:
            return f"Nothing to check on {self.context.handle}"

        errors = []
        if not strategy.manager():
            errors.append("package manager missing")
        if not strategy.language():
            errors.append("runtime version not satisfied")

        extensions = strategy.extensions()
        if extensions:
            errors.append(f"missing extensions: {', '.join(extensions)}")

        drivers = strategy.drivers()
        if drivers:
            errors.append(f"missing drivers: {', '.join(drivers)}")

        if errors:
            for error in errors:
                self.logger.error(f"{self.context.handle}: {error}")
            return False

        return f"{self.context.handle} is ready to receive the application"
