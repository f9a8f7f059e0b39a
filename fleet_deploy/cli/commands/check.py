"""Check command"""

import sys

import click

from ..decorators import deploy_options
from ..utils import console
from ...api.exceptions import FleetDeployError


@click.command()
@deploy_options
@click.pass_context
def check(ctx, options):
    """Check if the servers are ready to receive the application

    Verifies the package managers, the runtime versions and, for PHP, the
    extensions and database drivers the application requires.

    Examples:

        # Check every default connection
        fleet-deploy check

        # Check the servers of two connections at once
        fleet-deploy check --on production,staging --parallel
    """
    try:
        result = ctx.obj.run_tasks("check", options)

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    if not result.is_success:
        sys.exit(1)
