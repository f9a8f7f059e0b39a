"""Dependencies command"""

import sys

import click

from ..decorators import deploy_options
from ..utils import console
from ...api.exceptions import FleetDeployError


@click.command()
@click.option('--update', is_flag=True, help='Update the dependencies instead of installing them')
@deploy_options
@click.pass_context
def dependencies(ctx, update, options):
    """Install or update the dependencies of the current release

    Every package manager the application uses (npm, Composer, Bundler)
    runs in the current release folder.

    Examples:

        # Install dependencies
        fleet-deploy dependencies

        # Update them on the staging stage only
        fleet-deploy dependencies --update --stage staging
    """
    options["update"] = update

    try:
        result = ctx.obj.run_tasks("dependencies", options)

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    if not result.is_success:
        sys.exit(1)
