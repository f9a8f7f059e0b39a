"""CLI utilities"""

from .interactive import Prompter
from .output import console, format_connections, format_queue_result

__all__ = [
    "Prompter",
    "console",
    "format_connections",
    "format_queue_result",
]
