"""Command line interface for fleet-deploy"""

from .main import cli, main

__all__ = ["cli", "main"]
