"""Task base class"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from ..constants import HOOK_AFTER, HOOK_BEFORE
from ..models.result import OperationStatus, TaskResult


class Task(ABC):
    """Base class for all tasks

    A task is one named step of a queue, fired once per target with the
    target's own context.
    """

    name: str = ""
    description: str = ""

    # Refresh the release history from the server before running
    syncs_releases: bool = False

    # Fail on targets where no release has been deployed yet
    requires_release: bool = False

    def __init__(self, context):
        """
        Initialize task

        Args:
            context: TargetContext of the target the task runs against
        """
        self.context = context
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def execute(self) -> Any:
        """Run the task

        Returns:
            False on failure, a status message or any other value on success
        """
        pass

    def fire(self) -> TaskResult:
        """Run the task wrapped in its configured hooks

        Returns:
            Task result for the target
        """
        start = time.time()

        if self.syncs_releases:
            self.context.releases.sync_with_remote()

        if self.requires_release and self.context.releases.get_current_release() is None:
            self.logger.error(f"No release has yet been deployed on {self.context.handle}")
            return TaskResult(
                task=self.name,
                status=OperationStatus.FAILED,
                message=f"No release has yet been deployed on {self.context.handle}",
                duration=time.time() - start
            )

        if not self.run_hooks(HOOK_BEFORE):
            return TaskResult(
                task=self.name,
                status=OperationStatus.FAILED,
                message=f"{HOOK_BEFORE} hook of {self.name} failed",
                duration=time.time() - start
            )

        result = TaskResult.from_outcome(self.name, self.execute())

        if result.is_success and not self.run_hooks(HOOK_AFTER):
            result.status = OperationStatus.FAILED
            result.message = f"{HOOK_AFTER} hook of {self.name} failed"

        result.duration = time.time() - start
        return result

    def run_hooks(self, moment: str) -> bool:
        """Run the commands registered for a moment of this task"""
        commands = self.context.application.events.get_listeners(moment, self.name)
        for command in commands:
            self.logger.info(f"Running {moment} hook on {self.context.handle}: {command}")
            if not self.context.shell.run_for_current_release(command).success:
                self.logger.error(f"Hook failed on {self.context.handle}: {command}")
                return False

        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
