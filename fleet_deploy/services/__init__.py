"""Execution services for fleet-deploy"""

from .events import EventRegistry
from .queue import QueueRunner

__all__ = [
    "EventRegistry",
    "QueueRunner",
]
