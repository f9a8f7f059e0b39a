"""CLI decorators"""

from .options import deploy_options, DEPLOY_OPTIONS

__all__ = [
    "deploy_options",
    "DEPLOY_OPTIONS",
]
