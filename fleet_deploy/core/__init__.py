"""Core functionality for fleet-deploy"""

from .config import Config, replace_recursive
from .storage import LocalStorage
from .paths import PathResolver
from .target_resolver import TargetResolver, ResolutionContext, unify_servers_declarations
from .credentials import CredentialStore
from .releases import ReleaseController
from .application import Application, TargetContext

__all__ = [
    "Config",
    "replace_recursive",
    "LocalStorage",
    "PathResolver",
    "TargetResolver",
    "ResolutionContext",
    "unify_servers_declarations",
    "CredentialStore",
    "ReleaseController",
    "Application",
    "TargetContext",
]
