"""Dependencies strategies"""

from typing import Optional, Type

from .base import Strategy
from .managers import Bundler, Composer, Npm, PackageManager
from ..constants import StrategyFamily


class DependenciesStrategy(Strategy):
    """Installs the dependencies of one runtime with its package manager

    Each release lives in its own folder, so installs against independent
    targets can run concurrently.
    """

    family = StrategyFamily.DEPENDENCIES
    manager_class: Type[PackageManager] = PackageManager
    parallelizable = True
    role = "install"
    options = {
        "shared_dependencies": False,
    }

    def __init__(self, context):
        super().__init__(context)
        self.manager: PackageManager = self.manager_class(context.shell)

    def set_manager(self, manager: PackageManager) -> None:
        self.manager = manager

    def get_manager(self) -> PackageManager:
        return self.manager

    def is_executable(self) -> bool:
        return self.manager.is_executable()

    def install(self) -> bool:
        """Install the dependencies"""
        self.share_dependencies_folder()

        return self.manager.run_for_current_release("install")

    def update(self) -> bool:
        """Update the dependencies

        Sharing happened at install time and persists across releases.
        """
        return self.manager.run_for_current_release("update")

    def share_dependencies_folder(self) -> Optional[str]:
        """Share the dependencies folder across releases if configured

        Returns:
            The shared folder, None when nothing was shared
        """
        folder = self.manager.get_dependencies_folder()
        if not self.get_option("shared_dependencies") or not folder:
            return None

        self.shell.share(folder)
        return folder


class NodeDependenciesStrategy(DependenciesStrategy):
    name = "node"
    description = "Installs dependencies with npm"
    manager_class = Npm


class PhpDependenciesStrategy(DependenciesStrategy):
    name = "php"
    description = "Installs dependencies with Composer"
    manager_class = Composer


class RubyDependenciesStrategy(DependenciesStrategy):
    name = "ruby"
    description = "Installs dependencies with Bundler"
    manager_class = Bundler
