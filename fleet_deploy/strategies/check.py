"""Check strategies: is the server able to run the application"""

from typing import List, Optional, Type

from .base import Strategy
from .managers import Bundler, Composer, Npm, PackageManager
from ..constants import StrategyFamily
from ..utils.version_utils import extract_version, satisfies_minimum


class CheckStrategy(Strategy):
    """Checks the requirements of one runtime

    Applies only when the application ships the runtime's manifest.
    """

    family = StrategyFamily.CHECK
    manager_class: Type[PackageManager] = PackageManager
    language_binary: str = ""

    def __init__(self, context):
        super().__init__(context)
        self.package_manager: PackageManager = self.manager_class(context.shell)

    def is_executable(self) -> bool:
        return self.package_manager.has_manifest()

    def manager(self) -> bool:
        """Check that the package manager is installed"""
        if self.package_manager.get_binary() is None:
            self.logger.error(f"The {self.package_manager.binary} package manager could not be found")
            return False
        return True

    def language(self) -> bool:
        """Check that the runtime is at the required version"""
        required = self.get_language_constraint()
        if not required:
            return True

        current = self.get_language_version()
        if satisfies_minimum(current, required):
            return True

        self.logger.error(
            f"{self.language_binary} {current or 'is not installed'}, "
            f"the application requires {required}"
        )
        return False

    def extensions(self) -> List[str]:
        """Required extensions missing on the server"""
        return []

    def drivers(self) -> List[str]:
        """Required drivers missing on the server"""
        return []

    def get_language_version(self) -> Optional[str]:
        result = self.shell.run(f"{self.language_binary} --version")
        return extract_version(result.output) if result.success else None

    def get_language_constraint(self) -> Optional[str]:
        return None


class NodeCheckStrategy(CheckStrategy):
    name = "node"
    description = "Checks that the server can run a Node.js application"
    manager_class = Npm
    language_binary = "node"

    def get_language_constraint(self) -> Optional[str]:
        engines = self.package_manager.get_manifest().get("engines") or {}
        return engines.get("node")


class PhpCheckStrategy(CheckStrategy):
    name = "php"
    description = "Checks that the server can run a PHP application"
    manager_class = Composer
    language_binary = "php"
    options = {
        "drivers": [],
    }

    def get_language_constraint(self) -> Optional[str]:
        return self._requirements().get("php")

    def _requirements(self) -> dict:
        return self.package_manager.get_manifest().get("require") or {}

    def _loaded_modules(self) -> List[str]:
        result = self.shell.run("php -m")
        return [module.lower() for module in result.lines()] if result.success else []

    def extensions(self) -> List[str]:
        required = [name[len("ext-"):] for name in self._requirements() if name.startswith("ext-")]
        if not required:
            return []

        loaded = self._loaded_modules()
        return [extension for extension in required if extension.lower() not in loaded]

    def drivers(self) -> List[str]:
        drivers = self.get_option("drivers") or []
        if isinstance(drivers, str):
            drivers = [drivers]
        if not drivers:
            return []

        loaded = self._loaded_modules()
        return [driver for driver in drivers if f"pdo_{driver}".lower() not in loaded]


class RubyCheckStrategy(CheckStrategy):
    name = "ruby"
    description = "Checks that the server can run a Ruby application"
    manager_class = Bundler
    language_binary = "ruby"

    def get_language_constraint(self) -> Optional[str]:
        return self.package_manager.get_ruby_requirement()
