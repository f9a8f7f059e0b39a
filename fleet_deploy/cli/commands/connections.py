"""Connections command"""

import sys

import click

from ..utils import console, format_connections
from ...api.exceptions import FleetDeployError


@click.command()
@click.option('-C', '--on', help='Connection(s) to mark active, comma separated')
@click.option('--output', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def connections(ctx, on, output):
    """List the available connections and their servers

    Connections come from the configuration and the credentials stored
    locally.
    """
    try:
        resolver = ctx.obj.application.resolver
        if on:
            resolver.set_connections(on)

        available = [
            resolver.get_connection_model(name)
            for name in resolver.get_available_connections()
        ]
        active = list(resolver.get_connections())

    except FleetDeployError as e:
        console.print(f"[red]Error: {e}[/red]")
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)

    if output == 'json':
        console.print_json(data={
            "active": active,
            "connections": {
                connection.name: [server.credentials for server in connection.servers]
                for connection in available
            },
        })
    else:
        format_connections(available, active)
