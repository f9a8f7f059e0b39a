"""Tasks run by the queue executor"""

from .base import Task
from .check import CheckTask
from .current import CurrentTask
from .dependencies import DependenciesTask
from .rollback import RollbackTask
from .registry import build_task, get_task_class, register_task

__all__ = [
    "Task",
    "CheckTask",
    "CurrentTask",
    "DependenciesTask",
    "RollbackTask",
    "build_task",
    "get_task_class",
    "register_task",
]
