"""Current release command"""

import sys

import click

from ..decorators import deploy_options
from ..utils import console
from ...api.exceptions import FleetDeployError


@click.command()
@deploy_options
@click.pass_context
def current(ctx, options):
    """Display what the current release is on every server"""
    try:
        ctx.obj.run_tasks("current", options)

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
