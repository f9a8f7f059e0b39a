"""Strategy factory"""

from typing import Dict, List, Optional, Tuple, Type

from .base import Strategy
from .check import NodeCheckStrategy, PhpCheckStrategy, RubyCheckStrategy
from .dependencies import (
    NodeDependenciesStrategy,
    PhpDependenciesStrategy,
    RubyDependenciesStrategy,
)
from .polyglot import PolyglotCheckStrategy, PolyglotDependenciesStrategy
from ..api.exceptions import StrategyNotFoundError
from ..constants import DEFAULT_STRATEGY, StrategyFamily


class StrategyFactory:
    """Builds the strategies of one target"""

    # Registry of strategies by (family, name)
    _strategies: Dict[Tuple[str, str], Type[Strategy]] = {
        (StrategyFamily.CHECK, "polyglot"): PolyglotCheckStrategy,
        (StrategyFamily.CHECK, "node"): NodeCheckStrategy,
        (StrategyFamily.CHECK, "php"): PhpCheckStrategy,
        (StrategyFamily.CHECK, "ruby"): RubyCheckStrategy,
        (StrategyFamily.DEPENDENCIES, "polyglot"): PolyglotDependenciesStrategy,
        (StrategyFamily.DEPENDENCIES, "node"): NodeDependenciesStrategy,
        (StrategyFamily.DEPENDENCIES, "php"): PhpDependenciesStrategy,
        (StrategyFamily.DEPENDENCIES, "ruby"): RubyDependenciesStrategy,
    }

    def __init__(self, context):
        """
        Initialize strategy factory

        Args:
            context: TargetContext the built strategies run against
        """
        self.context = context

    def build(self, family: str, name: str) -> Optional[Strategy]:
        """Build a strategy

        Args:
            family: Strategy family (check, dependencies)
            name: Strategy name within the family

        Returns:
            Strategy instance, None if unknown or not applicable to the
            application
        """
        strategy_class = self._strategies.get((family.lower(), name.lower()))
        if strategy_class is None:
            return None

        strategy = strategy_class(self.context)
        if not strategy.is_executable():
            return None

        return strategy

    def build_configured(self, family: str) -> Optional[Strategy]:
        """Build the strategy configured for a family

        Raises:
            StrategyNotFoundError: If the configured name is not registered
        """
        name = self.context.config.get(("strategies", family)) or DEFAULT_STRATEGY
        if not self.is_supported(family, name):
            raise StrategyNotFoundError(family, name)

        return self.build(family, name)

    @classmethod
    def register_strategy(cls, family: str, name: str, strategy_class: Type[Strategy]) -> None:
        """Register a new strategy"""
        cls._strategies[(family.lower(), name.lower())] = strategy_class

    @classmethod
    def get_supported_strategies(cls, family: str) -> List[str]:
        return [name for strategy_family, name in cls._strategies if strategy_family == family]

    @classmethod
    def is_supported(cls, family: str, name: str) -> bool:
        return (family.lower(), str(name).lower()) in cls._strategies
