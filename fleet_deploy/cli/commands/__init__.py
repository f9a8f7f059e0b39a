"""CLI commands"""

from . import check
from . import dependencies
from . import rollback
from . import current
from . import connections
from . import plugins

__all__ = [
    "check",
    "dependencies",
    "rollback",
    "current",
    "connections",
    "plugins",
]
