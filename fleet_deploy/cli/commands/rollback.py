"""Rollback command"""

import sys

import click

from ..decorators import deploy_options
from ..utils import console
from ...api.exceptions import FleetDeployError


@click.command()
@click.argument('release', required=False)
@click.option('--list', 'list_releases', is_flag=True, help='Choose the release from a list')
@deploy_options
@click.pass_context
def rollback(ctx, release, list_releases, options):
    """Rollback to the previous release, or to a specific one

    Arguments:
        RELEASE: Release to activate, defaults to the one before the current

    Examples:

        # Go back one release
        fleet-deploy rollback

        # Activate a given release
        fleet-deploy rollback 20240120101500

        # Pick the release interactively
        fleet-deploy rollback --list
    """
    options["release"] = release
    options["list"] = list_releases

    try:
        result = ctx.obj.run_tasks("rollback", options)

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    if not result.is_success:
        sys.exit(1)
