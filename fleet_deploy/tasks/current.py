"""Current release task"""

from .base import Task
from ..utils.formatting import format_release


class CurrentTask(Task):
    """Reports the release currently active on the target"""

    name = "current"
    description = "Display what the current release is"

    syncs_releases = True

    def execute(self):
        current = self.context.releases.get_current_release()
        if current is None:
            return "No release has yet been deployed"

        return f"The current release is {format_release(current)}"
