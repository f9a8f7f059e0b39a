"""Runs task queues against every resolved target"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from .queue import QueueRunner
from ..api.exceptions import CredentialMissingError
from ..models.connection import Target
from ..models.result import OperationStatus, QueueResult, TargetResult, TaskResult
from ..tasks.registry import build_task, get_task_class

logger = logging.getLogger(__name__)


@dataclass
class TaskQueue:
    """Tasks to run, in order, against resolved targets"""
    tasks: List[str]
    targets: List[Target] = field(default_factory=list)
    parallel: bool = False


class TaskQueueExecutor:
    """Runs tasks one step at a time across targets

    Each step runs on every target before the next step starts. In
    sequential mode the first failure halts the queue. In parallel mode a
    failed target gets no further steps while the others carry on.
    """

    def __init__(self, application):
        """
        Initialize queue executor

        Args:
            application: Application the queue runs in
        """
        self.application = application

    def run(self,
            tasks: Union[str, Iterable[str]],
            options: Optional[Dict[str, Any]] = None) -> QueueResult:
        """
        Run tasks with the given command options

        The connections and stage selected by the options only last for
        this run.

        Args:
            tasks: Task name or names, in order
            options: Command options (parallel, pretend, on, stage, server,
                and task specific ones)

        Returns:
            Result per target

        Raises:
            TaskNotFoundError: If a task name is unknown
            ConnectionError: If no requested connection is valid
            CredentialMissingError: If credentials are missing and cannot
                be asked for
        """
        tasks = [tasks] if isinstance(tasks, str) else list(tasks)
        for name in tasks:
            get_task_class(name)

        start = time.time()
        resolver = self.application.resolver
        resolution = resolver.context
        self.application.bind_command(options or {})
        try:
            queue = self.build_queue(tasks)
            self.gather_credentials(queue.targets)
            result = self.run_queue(queue)
        finally:
            self.application.unbind_command()
            resolver.context = resolution
            self.application.events.register_configured_events(resolver.get_stage())

        result.duration = time.time() - start
        logger.info(f"Execution time: {round(result.duration, 4)}s")

        return result

    def build_queue(self, tasks: List[str]) -> TaskQueue:
        """Apply the bound options and resolve the targets"""
        resolver = self.application.resolver

        connections = self.application.option("on")
        if connections:
            resolver.set_connections(connections)

        stage = self.application.option("stage")
        if stage:
            resolver.set_stage(stage)

        self.application.events.register_configured_events(resolver.get_stage())

        targets = resolver.get_targets()
        logger.debug(f"Resolved {len(targets)} target(s): {', '.join(map(str, targets))}")

        return TaskQueue(tasks=tasks, targets=targets, parallel=self.application.parallel)

    ##################################################################
    # Credentials
    ##################################################################

    def gather_credentials(self, targets: List[Target]) -> None:
        """Make sure every target and the repository can be reached

        Missing values are asked for when a prompt is available, otherwise
        nothing runs.

        Raises:
            CredentialMissingError: If credentials are missing and there is
                no prompt to ask them
        """
        credentials = self.application.credentials
        prompt = self.application.prompt

        for target in targets:
            missing = credentials.get_missing_server_credentials(target.connection, target.server)
            if not missing:
                continue
            if prompt is None:
                raise CredentialMissingError(target.handle, missing)

            answers = {
                name: prompt.ask(f"What is the {name} of {target.handle}?")
                for name in missing
            }
            credentials.sync_connection_credentials(target.connection, answers, target.server)

            still_missing = credentials.get_missing_server_credentials(target.connection, target.server)
            if still_missing:
                raise CredentialMissingError(target.handle, still_missing)

        missing = credentials.get_missing_repository_credentials()
        if not missing:
            return
        if prompt is None:
            raise CredentialMissingError("repository", missing)

        answers = {
            name: prompt.ask(f"What is your repository {name}?", password=name == "password")
            for name in missing
        }
        credentials.store_repository_credentials(answers)

        still_missing = credentials.get_missing_repository_credentials()
        if still_missing:
            raise CredentialMissingError("repository", still_missing)

    ##################################################################
    # Execution
    ##################################################################

    def run_queue(self, queue: TaskQueue) -> QueueResult:
        """Run every task step across the targets of a queue"""
        result = QueueResult(tasks=list(queue.tasks), parallel=queue.parallel)
        contexts = {}
        for target in queue.targets:
            context = self.application.create_target_context(target)
            contexts[context.handle] = context
            result.targets[context.handle] = TargetResult(target=target)

        runner = QueueRunner(parallel=queue.parallel, max_workers=self.application.max_workers)

        for name in queue.tasks:
            active = [handle for handle in contexts if result.targets[handle].is_success]
            if not active:
                break

            units = [(handle, self._fire(name, contexts[handle])) for handle in active]
            outcomes = runner.run(units, halt_on_failure=not queue.parallel)

            for unit in outcomes:
                if unit.error is not None:
                    task_result = TaskResult(
                        task=name,
                        status=OperationStatus.FAILED,
                        error=str(unit.error),
                        duration=unit.duration
                    )
                else:
                    task_result = unit.value
                result.targets[unit.key].tasks.append(task_result)

            if not queue.parallel and any(unit.failed for unit in outcomes):
                logger.error(f"Task {name} failed, halting the queue")
                result.halted = True
                break

        return result

    @staticmethod
    def _fire(name: str, context):
        return lambda: build_task(name, context).fire()
