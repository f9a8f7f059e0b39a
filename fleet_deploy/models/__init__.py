"""Data models for fleet-deploy"""

from .connection import Connection, Server, Target
from .release import ReleaseHistory
from .result import (
    OperationStatus,
    UnitResult,
    RollbackResult,
    TaskResult,
    TargetResult,
    QueueResult,
)

__all__ = [
    # Connection models
    "Connection",
    "Server",
    "Target",

    # Release models
    "ReleaseHistory",

    # Result models
    "OperationStatus",
    "UnitResult",
    "RollbackResult",
    "TaskResult",
    "TargetResult",
    "QueueResult",
]
