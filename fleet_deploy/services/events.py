"""Configured before/after hooks of tasks"""

import logging
import threading
from typing import Dict, List, Optional

from ..constants import HOOK_AFTER, HOOK_BEFORE
from ..core.config import Config, replace_recursive

logger = logging.getLogger(__name__)


class EventRegistry:
    """Shell commands to run around tasks, scoped by stage

    Configuration::

        hooks:
          before:
            dependencies: ["php artisan down"]
          after:
            dependencies: ["php artisan up"]
        stages:
          hooks:
            staging:
              after:
                dependencies: ["php artisan cache:clear"]
    """

    def __init__(self, config: Config):
        self.config = config
        self.stage: Optional[str] = None
        self._listeners: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def event_name(moment: str, task: str) -> str:
        return f"{moment}.{task}"

    def register_configured_events(self, stage: Optional[str] = None) -> None:
        """Drop every listener and register the configured ones again

        Args:
            stage: Stage whose hook overrides apply
        """
        hooks = dict(self.config.get("hooks") or {})
        if stage:
            hooks = replace_recursive(hooks, self.config.get(("stages", "hooks", stage)) or {})

        listeners = {}
        for moment in (HOOK_BEFORE, HOOK_AFTER):
            for task, commands in dict(hooks.get(moment) or {}).items():
                if isinstance(commands, str):
                    commands = [commands]
                listeners[self.event_name(moment, task)] = list(commands or [])

        with self._lock:
            self.stage = stage
            self._listeners = listeners

        logger.debug(f"Registered {len(listeners)} event(s) for stage {stage or '-'}")

    def get_listeners(self, moment: str, task: str) -> List[str]:
        """Commands registered for a moment of a task"""
        with self._lock:
            return list(self._listeners.get(self.event_name(moment, task), []))
