"""Rollback task"""

from .base import Task


class RollbackTask(Task):
    """Rolls the current release back

    Without arguments the release before the current one is activated. The
    ``release`` option picks a specific release and ``list`` lets the user
    choose one interactively.
    """

    name = "rollback"
    description = "Rollback to the previous release, or to a specific one"

    syncs_releases = True

    def execute(self):
        releases = self.context.releases

        if self.context.option("list"):
            if self.context.prompt is None:
                self.logger.error("Choosing a release requires an interactive prompt")
                return False
            result = releases.rollback_interactive(self.context.prompt)
        elif self.context.option("release"):
            result = releases.rollback_to(self.context.option("release"))
        else:
            result = releases.rollback_to_previous()

        if result.success:
            self.logger.info(f"{self.context.handle}: {result.message}")
        else:
            self.logger.warning(f"{self.context.handle}: {result.message}")

        return result.message
