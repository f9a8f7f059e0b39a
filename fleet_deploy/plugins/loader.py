"""Plugin loader and discovery"""

import importlib
import inspect
import logging

from ..constants import CONFIG_PLUGINS_KEY
from ..strategies.base import Strategy
from ..strategies.factory import StrategyFactory
from ..tasks.base import Task
from ..tasks.registry import register_task


class PluginLoader:
    """Registers the tasks and strategies of plugin modules

    A plugin is a plain Python module. Every concrete ``Task`` it defines is
    registered under its name and every ``Strategy`` under its family and
    name, replacing a built-in of the same name.
    """

    def __init__(self):
        self.logger = logging.getLogger("PluginLoader")
        self._loaded_modules = set()

    def load_configured(self, config) -> int:
        """
        Load the modules listed under ``plugins`` in the configuration

        Args:
            config: Project configuration

        Returns:
            Number of tasks and strategies registered
        """
        modules = config.get(CONFIG_PLUGINS_KEY) or []
        if isinstance(modules, str):
            modules = [modules]

        return sum(self.load_from_module(module_name) for module_name in modules)

    def load_from_module(self, module_name: str) -> int:
        """
        Load a plugin from a Python module

        Args:
            module_name: Fully qualified module name

        Returns:
            Number of tasks and strategies registered
        """
        if module_name in self._loaded_modules:
            self.logger.info(f"Module {module_name} already loaded")
            return 0

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            self.logger.error(f"Failed to import plugin {module_name}: {e}")
            return 0

        count = self._register_module(module)
        self._loaded_modules.add(module_name)
        self.logger.debug(f"Loaded {count} extension(s) from {module_name}")

        return count

    def _register_module(self, module) -> int:
        count = 0

        for _, obj in inspect.getmembers(module, inspect.isclass):
            # Classes imported into the module belong to someone else
            if obj.__module__ != module.__name__ or inspect.isabstract(obj):
                continue

            if issubclass(obj, Task) and obj.name:
                register_task(obj)
                count += 1
            elif issubclass(obj, Strategy) and obj.family and obj.name:
                StrategyFactory.register_strategy(obj.family, obj.name, obj)
                count += 1

        return count
