"""Plugins command"""

import sys

import click

from ..utils import console
from ...api.exceptions import FleetDeployError
from ...constants import CONFIG_PLUGINS_KEY, PROJECT_CONFIG_FILE
from ...plugins import PluginInstaller


@click.group()
@click.pass_context
def plugins(ctx):
    """Manage the plugins adding tasks and strategies"""
    pass


@plugins.command()
@click.argument('package')
@click.pass_context
def install(ctx, package):
    """Install a plugin package

    The package is installed with pip on this machine. List the modules it
    provides under ``plugins`` in the project configuration to load them.

    Examples:
        fleet-deploy plugins install fleet-deploy-yarn
    """
    try:
        with console.status(f"Installing {package}..."):
            PluginInstaller().install(package)

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    console.print(f"[green]✓[/green] Installed {package}")
    console.print(f"[dim]Add its modules to '{CONFIG_PLUGINS_KEY}' in {PROJECT_CONFIG_FILE} to load them[/dim]")
