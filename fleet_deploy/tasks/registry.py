"""Task registry"""

from typing import Dict, Type

from .base import Task
from .check import CheckTask
from .current import CurrentTask
from .dependencies import DependenciesTask
from .rollback import RollbackTask
from ..api.exceptions import TaskNotFoundError

# Registry of tasks by name
_tasks: Dict[str, Type[Task]] = {
    task.name: task for task in (CheckTask, DependenciesTask, RollbackTask, CurrentTask)
}


def register_task(task_class: Type[Task]) -> None:
    """Register a new task under its name"""
    _tasks[task_class.name] = task_class


def get_task_class(name: str) -> Type[Task]:
    """Get a task class by name

    Raises:
        TaskNotFoundError: If no task has that name
    """
    task_class = _tasks.get(str(name).lower())
    if task_class is None:
        raise TaskNotFoundError(name)
    return task_class


def build_task(name: str, context) -> Task:
    """Build a task for one target"""
    return get_task_class(name)(context)
