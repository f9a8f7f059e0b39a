"""Application container and per-target execution context"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import Config
from .credentials import CredentialStore
from .paths import PathResolver
from .releases import ReleaseController
from .storage import LocalStorage
from .target_resolver import TargetResolver
from ..constants import (
    DEFAULT_PARALLEL_WORKERS,
    DEFAULT_ROOT_DIRECTORY,
    DEFAULT_STORAGE_FILE,
    ENV_CONFIG_PATH,
    ENV_STORAGE_PATH,
    PROJECT_CONFIG_FILE,
)
from ..models.connection import Target
from ..plugins.loader import PluginLoader
from ..remote.base import RemoteShell
from ..remote.factory import ShellFactory
from ..services.events import EventRegistry
from ..services.queue import QueueRunner
from ..strategies.factory import StrategyFactory

logger = logging.getLogger(__name__)


class Application:
    """Holds the services of one fleet-deploy invocation

    The options of the command being run are bound for the duration of a
    task queue and exposed to everything resolved from here.
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 storage: Optional[Config] = None,
                 prompt=None,
                 shell_factory: Optional[ShellFactory] = None,
                 credentials: Optional[CredentialStore] = None):
        """Initialize application

        Args:
            config: Project configuration
            storage: Locally persisted state
            prompt: Object with ``ask_with`` and ``ask`` for interactive answers
            shell_factory: Creates the shell of each target
            credentials: Credential store, built from the other services if omitted
        """
        self.config = config or Config()
        self.storage = storage or LocalStorage()
        self.prompt = prompt
        self.shell_factory = shell_factory
        self.command_options: Optional[Dict[str, Any]] = None

        self.events = EventRegistry(self.config)
        self.resolver = TargetResolver(
            self.config,
            self.storage,
            options=lambda: self.command_options,
            on_change=self._on_target_change
        )
        self.credentials = credentials or CredentialStore(
            self.config,
            self.storage,
            self.resolver,
            options=lambda: self.command_options
        )

        self.plugins = PluginLoader()
        self.plugins.load_configured(self.config)

    @classmethod
    def from_project(cls,
                     config_path: Optional[Union[str, Path]] = None,
                     storage_path: Optional[Union[str, Path]] = None,
                     prompt=None) -> 'Application':
        """Create an application from the project files

        Args:
            config_path: Configuration file, defaults to ``.fleet-deploy.yaml``
            storage_path: State file, defaults to ``.fleet-deploy/state.json``
            prompt: Interactive prompt

        Returns:
            Application instance
        """
        config_path = Path(config_path or os.environ.get(ENV_CONFIG_PATH) or PROJECT_CONFIG_FILE)
        config = Config.load(config_path)

        storage_path = storage_path or os.environ.get(ENV_STORAGE_PATH)
        if not storage_path:
            storage_path = config_path.resolve().parent / DEFAULT_STORAGE_FILE

        return cls(config, LocalStorage(storage_path), prompt=prompt)

    def _on_target_change(self, resolver: TargetResolver) -> None:
        self.events.register_configured_events(resolver.get_stage())

    ##################################################################
    # Bound command
    ##################################################################

    def bind_command(self, options: Dict[str, Any]) -> None:
        self.command_options = dict(options)

    def unbind_command(self) -> None:
        self.command_options = None

    def has_command(self) -> bool:
        return self.command_options is not None

    def option(self, name: str, default: Any = None) -> Any:
        """Get an option of the bound command"""
        value = (self.command_options or {}).get(name)
        return default if value is None else value

    @property
    def parallel(self) -> bool:
        return bool(self.option("parallel", False))

    @property
    def max_workers(self) -> int:
        return int(self.config.get("parallel_workers") or DEFAULT_PARALLEL_WORKERS)

    def queue_runner(self) -> QueueRunner:
        """Runner in the concurrency mode of the bound command"""
        return QueueRunner(parallel=self.parallel, max_workers=self.max_workers)

    def get_shell_factory(self) -> ShellFactory:
        if self.shell_factory is not None:
            return self.shell_factory
        return ShellFactory(pretend=bool(self.option("pretend", False)))

    ##################################################################
    # Targets
    ##################################################################

    def get_paths(self, stage: Optional[str] = None) -> PathResolver:
        application_name = self.config.get("application_name") or "application"
        root_directory = self.config.get("remote.root_directory") or DEFAULT_ROOT_DIRECTORY
        return PathResolver(application_name, root_directory, stage)

    def create_target_context(self, target: Target) -> 'TargetContext':
        """Build an isolated context for one target

        Args:
            target: Resolved target

        Returns:
            Context with its own resolver, credentials, shell and releases
        """
        resolver = self.resolver.fork(target.connection, target.server, target.stage)
        credentials = CredentialStore(
            self.config,
            self.storage,
            resolver,
            scm=self.credentials.scm,
            runner=self.credentials.runner,
            options=lambda: self.command_options
        )
        paths = self.get_paths(target.stage)
        releases = ReleaseController(self.storage, resolver.get_handle(), paths=paths)
        shell = self.get_shell_factory().create(
            resolver.get_server_credentials(),
            paths,
            releases.get_current_release
        )
        releases.shell = shell

        return TargetContext(
            application=self,
            target=target,
            resolver=resolver,
            credentials=credentials,
            paths=paths,
            shell=shell,
            releases=releases,
        )


@dataclass
class TargetContext:
    """Everything a task needs to run against one target"""
    application: Application
    target: Target
    resolver: TargetResolver
    credentials: CredentialStore
    paths: PathResolver
    shell: RemoteShell
    releases: ReleaseController

    def __post_init__(self):
        self.strategies = StrategyFactory(self)

    @property
    def config(self) -> Config:
        return self.application.config

    @property
    def prompt(self):
        return self.application.prompt

    @property
    def handle(self) -> str:
        return self.resolver.get_handle()

    def option(self, name: str, default: Any = None) -> Any:
        return self.application.option(name, default)

    def queue_runner(self) -> QueueRunner:
        return self.application.queue_runner()
