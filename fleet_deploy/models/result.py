"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional

from .connection import Target


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class UnitResult:
    """Outcome of one deferred unit of work run by a QueueRunner"""
    key: Hashable
    value: Any = None
    error: Optional[BaseException] = None
    duration: float = 0.0

    @property
    def failed(self) -> bool:
        """An error was raised or the unit returned False or a failed task"""
        if self.error is not None or self.value is False:
            return True
        return isinstance(self.value, TaskResult) and not self.value.is_success


@dataclass
class RollbackResult:
    """Result of a release activation or rollback"""
    success: bool
    release: Optional[int] = None
    message: str = ""
    unavailable: bool = False


@dataclass
class TaskResult:
    """Result of one task fired against one target"""
    task: str
    status: OperationStatus
    message: str = ""
    error: Optional[str] = None
    duration: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if the task succeeded"""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def from_outcome(cls, task: str, outcome: Any, duration: float = 0.0) -> 'TaskResult':
        """Interpret a task's return value

        ``False`` is a failure, a string is a status message, anything else
        is a success.
        """
        if outcome is False:
            return cls(task=task, status=OperationStatus.FAILED, duration=duration)

        message = outcome if isinstance(outcome, str) else ""
        return cls(task=task, status=OperationStatus.SUCCESS, message=message, duration=duration)


@dataclass
class TargetResult:
    """All task results for one target"""
    target: Target
    tasks: List[TaskResult] = field(default_factory=list)

    @property
    def handle(self) -> str:
        return self.target.handle

    @property
    def status(self) -> OperationStatus:
        """Aggregate status of the target"""
        if any(task.status == OperationStatus.FAILED for task in self.tasks):
            return OperationStatus.FAILED
        if not self.tasks or all(task.status == OperationStatus.SKIPPED for task in self.tasks):
            return OperationStatus.SKIPPED
        return OperationStatus.SUCCESS

    @property
    def is_success(self) -> bool:
        return self.status != OperationStatus.FAILED


@dataclass
class QueueResult:
    """Result of a whole task queue across every target"""
    tasks: List[str] = field(default_factory=list)
    targets: Dict[str, TargetResult] = field(default_factory=dict)
    parallel: bool = False
    halted: bool = False
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    duration: float = 0.0

    @property
    def status(self) -> OperationStatus:
        """Aggregate status across targets"""
        statuses = [target.is_success for target in self.targets.values()]
        if not statuses or all(statuses):
            return OperationStatus.SUCCESS
        if any(statuses):
            return OperationStatus.PARTIAL
        return OperationStatus.FAILED

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def failed_targets(self) -> List[str]:
        """Handles of the targets that failed"""
        return [handle for handle, target in self.targets.items() if not target.is_success]
