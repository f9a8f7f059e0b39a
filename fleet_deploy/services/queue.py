"""Sequential or parallel execution of deferred units of work"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Hashable, List, Sequence, Tuple

from ..constants import DEFAULT_PARALLEL_WORKERS
from ..models.result import UnitResult

logger = logging.getLogger(__name__)

Unit = Tuple[Hashable, Callable[[], Any]]


class QueueRunner:
    """Runs ``(key, callable)`` units one after the other or on a worker pool

    Results always come back in submission order. An exception raised by a
    unit is logged and recorded on its result, never propagated to sibling
    units.
    """

    def __init__(self, parallel: bool = False, max_workers: int = DEFAULT_PARALLEL_WORKERS):
        self.parallel = parallel
        self.max_workers = max(1, int(max_workers or DEFAULT_PARALLEL_WORKERS))

    def run(self, units: Sequence[Unit], halt_on_failure: bool = False) -> List[UnitResult]:
        """
        Run a batch of units

        Args:
            units: Keys and zero-argument callables
            halt_on_failure: Sequential mode only, stop at the first unit
                that fails; the remaining units get no result

        Returns:
            One result per unit that ran
        """
        units = list(units)
        if not units:
            return []

        if self.parallel and len(units) > 1:
            return self._run_parallel(units)

        results = []
        for key, callback in units:
            result = self._run_unit(key, callback)
            results.append(result)
            if halt_on_failure and result.failed:
                logger.debug(f"Halting queue after failure of {key}")
                break

        return results

    def _run_parallel(self, units: List[Unit]) -> List[UnitResult]:
        workers = min(self.max_workers, len(units))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._run_unit, key, callback) for key, callback in units]
            return [future.result() for future in futures]

    @staticmethod
    def _run_unit(key: Hashable, callback: Callable[[], Any]) -> UnitResult:
        start = time.time()
        try:
            value = callback()
        except Exception as e:
            logger.error(f"{key} failed: {e}")
            logger.debug("Unit traceback", exc_info=True)
            return UnitResult(key=key, error=e, duration=time.time() - start)

        return UnitResult(key=key, value=value, duration=time.time() - start)
