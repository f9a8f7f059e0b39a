"""Strategies fanning out to one strategy per runtime"""

from typing import Any, Callable, Dict, List, Optional

from .base import Strategy
from ..constants import POLYGLOT_CHILDREN, StrategyFamily


class PolyglotStrategy(Strategy):
    """Runs a method on every runtime strategy of its family

    Children that do not apply to the application (no instance) count as
    satisfied; a child that returns ``False`` or produces no result at all
    fails the whole strategy.
    """

    name = "polyglot"

    # Child strategies, in order
    strategies: List[str] = POLYGLOT_CHILDREN

    def __init__(self, context):
        super().__init__(context)
        self.strategies = list(self.get_option("strategies") or type(self).strategies)
        self.results: Dict[str, Optional[bool]] = {}

    def on_strategies(self, callback: Callable[[Strategy], Any]) -> Dict[str, Any]:
        """Call a function on every applicable child

        Args:
            callback: Receives a child instance

        Returns:
            Outcome per child name, None for children that do not apply
        """
        results: Dict[str, Any] = {}
        units = []

        for name in self.strategies:
            instance = self.context.strategies.build(self.family, name)
            if instance is None:
                self.logger.debug(f"Skipping {self.family}:{name}, not applicable")
                results[name] = None
                continue

            units.append((name, self._bind(callback, instance)))

        for unit in self.context.queue_runner().run(units):
            if unit.error is None:
                results[unit.key] = unit.value

        self.results = results
        return results

    @staticmethod
    def _bind(callback: Callable[[Strategy], Any], instance: Strategy) -> Callable[[], Any]:
        return lambda: callback(instance)

    def execute_strategies_method(self, method: str) -> Dict[str, Any]:
        """Call a method by name on every applicable child"""
        return self.on_strategies(lambda strategy: getattr(strategy, method)())

    def passed(self) -> bool:
        """Whether every configured child passed or did not apply"""
        return self.check_strategies_results(self.results)

    def check_strategies_results(self, results: Dict[str, Any]) -> bool:
        satisfied = [name for name, value in results.items() if value is not False]
        return len(satisfied) == len(self.strategies)

    def gather_missing_from_method(self, method: str) -> List[Any]:
        """Concatenate the lists returned by a method on every child"""
        results = self.execute_strategies_method(method)

        missing = []
        for name in self.strategies:
            missing.extend(results.get(name) or [])

        return missing


class PolyglotCheckStrategy(PolyglotStrategy):
    family = StrategyFamily.CHECK
    description = "Checks the requirements of every runtime the application uses"

    def manager(self) -> bool:
        """Check that the package managers are present"""
        self.execute_strategies_method("manager")
        return self.passed()

    def language(self) -> bool:
        """Check that the runtimes are at the required versions"""
        self.execute_strategies_method("language")
        return self.passed()

    def extensions(self) -> List[str]:
        return self.gather_missing_from_method("extensions")

    def drivers(self) -> List[str]:
        return self.gather_missing_from_method("drivers")


class PolyglotDependenciesStrategy(PolyglotStrategy):
    family = StrategyFamily.DEPENDENCIES
    description = "Installs the dependencies of every runtime the application uses"
    parallelizable = True
    role = "install"

    def install(self) -> bool:
        self.execute_strategies_method("install")
        return self.passed()

    def update(self) -> bool:
        self.execute_strategies_method("update")
        return self.passed()
