"""Pluggable per-runtime strategies"""

from .base import Strategy
from .managers import PackageManager, Npm, Composer, Bundler
from .check import CheckStrategy, NodeCheckStrategy, PhpCheckStrategy, RubyCheckStrategy
from .dependencies import (
    DependenciesStrategy,
    NodeDependenciesStrategy,
    PhpDependenciesStrategy,
    RubyDependenciesStrategy,
)
from .polyglot import PolyglotStrategy, PolyglotCheckStrategy, PolyglotDependenciesStrategy
from .factory import StrategyFactory

__all__ = [
    "Strategy",
    "PackageManager",
    "Npm",
    "Composer",
    "Bundler",
    "CheckStrategy",
    "NodeCheckStrategy",
    "PhpCheckStrategy",
    "RubyCheckStrategy",
    "DependenciesStrategy",
    "NodeDependenciesStrategy",
    "PhpDependenciesStrategy",
    "RubyDependenciesStrategy",
    "PolyglotStrategy",
    "PolyglotCheckStrategy",
    "PolyglotDependenciesStrategy",
    "StrategyFactory",
]
