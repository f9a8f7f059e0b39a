"""Strategy base class"""

import logging
from abc import ABC
from typing import Any, Dict, Optional


class Strategy(ABC):
    """Base class for all strategies

    A strategy is one way of carrying out a step (checking the server,
    installing dependencies) for one target. Strategies of the same family
    answer the same capabilities.
    """

    family: str = ""
    name: str = ""
    description: str = ""

    # Safe to run concurrently against independent targets
    parallelizable: bool = False

    # Step an outer scheduler orders the strategy by
    role: Optional[str] = None

    # Default options, overridden by ``strategies.options.<name>``
    options: Dict[str, Any] = {}

    def __init__(self, context):
        """
        Initialize strategy

        Args:
            context: TargetContext of the target the strategy runs against
        """
        self.context = context
        self.options = {**type(self).options, **self._configured_options()}
        self.logger = logging.getLogger(self.__class__.__name__)

    def _configured_options(self) -> Dict[str, Any]:
        configured = self.context.config.get(("strategies", "options", self.name))
        return dict(configured) if isinstance(configured, dict) else {}

    @property
    def shell(self):
        return self.context.shell

    def get_option(self, name: str, default: Any = None) -> Any:
        """Get a strategy option"""
        return self.options.get(name, default)

    def is_executable(self) -> bool:
        """Whether this strategy applies to the application"""
        return True

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.family}:{self.name}>"
