"""Options shared by every command running a task queue"""

from functools import wraps
from typing import Callable

import click

DEPLOY_OPTIONS = ("parallel", "pretend", "on", "stage", "server")


def deploy_options(func: Callable) -> Callable:
    """Decorator adding the target and execution options to a command

    The decorated function receives the shared options gathered in a
    single ``options`` dict keyword argument.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        options = {name: kwargs.pop(name) for name in DEPLOY_OPTIONS}
        if options["server"]:
            options["server"] = ",".join(options["server"])
        return func(*args, options=options, **kwargs)

    wrapper = click.option('-P', '--parallel', is_flag=True,
                           help='Run the tasks on every target at once')(wrapper)
    wrapper = click.option('-p', '--pretend', is_flag=True,
                           help='Print the commands instead of running them')(wrapper)
    wrapper = click.option('-C', '--on',
                           help='Connection(s) to run on, comma separated')(wrapper)
    wrapper = click.option('-S', '--stage',
                           help='Stage to run on')(wrapper)
    wrapper = click.option('--server', multiple=True,
                           help='Server index to restrict the connection to (repeatable)')(wrapper)

    return wrapper
