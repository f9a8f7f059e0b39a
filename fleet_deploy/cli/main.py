# fleet_deploy/cli/main.py
"""Main CLI entry point for fleet-deploy"""

import os
import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..core import Application
from ..models import QueueResult
from ..services.queue_executor import TaskQueueExecutor
from .utils import Prompter, console, format_queue_result

# Import all commands
from .commands import (
    check,
    dependencies,
    rollback,
    current,
    connections,
    plugins,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )


class Context:
    """CLI context object with lazy application initialization

    The project configuration is only loaded when a command needs the
    application.
    """

    def __init__(self):
        """Initialize CLI context"""
        self.verbose: bool = False
        self.debug: bool = False
        self.config_path: Optional[Path] = None
        self._application: Optional[Application] = None

    @property
    def application(self) -> Application:
        """Get the application (lazy loading)

        Raises:
            ConfigError: If the project configuration cannot be loaded
        """
        if self._application is None:
            self._application = Application.from_project(
                self.config_path,
                prompt=Prompter(console)
            )
            if self.debug:
                console.print(f"[dim]Configuration: {self._application.config.path}[/dim]")
        return self._application

    def run_tasks(self, tasks: Union[str, List[str]], options: Dict[str, Any]) -> QueueResult:
        """Run tasks against the targets selected by the options and display the result"""
        result = TaskQueueExecutor(self.application).run(tasks, options)
        format_queue_result(result)
        return result


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Project configuration file')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path):
    """fleet-deploy - Run deployment tasks across many servers

    Tasks run against every server of the selected connections, one step
    at a time, either sequentially or in parallel.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Create context with lazy initialization
    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.config_path = config_path


# Register commands
cli.add_command(check.check)
cli.add_command(dependencies.dependencies)
cli.add_command(rollback.rollback)
cli.add_command(current.current)
cli.add_command(connections.connections)
cli.add_command(plugins.plugins)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
