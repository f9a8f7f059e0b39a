"""Plugin system for fleet-deploy"""

from .installer import PluginInstaller
from .loader import PluginLoader

__all__ = [
    "PluginInstaller",
    "PluginLoader",
]
