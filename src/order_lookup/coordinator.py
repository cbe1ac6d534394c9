"""
Lookup Coordinator

Runs lookup tasks on a fixed pool of worker threads. Tasks beyond the
pool size wait in an unbounded FIFO queue. Each submitter gets its own
Future; identical tasks are not merged and a failing task does not affect
the others.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict

from order_lookup.errors import InvalidInput
from order_lookup.models import LookupTask

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT = 5

# Takes the task contact (email, phone or order number)
Strategy = Callable[[str], Any]


class LookupCoordinator:
    """Bounded-concurrency executor for lookup tasks."""

    def __init__(
        self,
        strategies: Dict[str, Strategy],
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    ):
        """
        Args:
            strategies: Maps task type ("email", "phone", "order_details")
                to a callable taking the task contact
            max_concurrent: Number of lookups allowed in flight at once
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.strategies = dict(strategies)
        self.max_concurrent = max_concurrent
        self._executor = ThreadPoolExecutor(
            max_workers=max_concurrent,
            thread_name_prefix="order-lookup",
        )

    def submit(self, task: LookupTask) -> Future:
        """Queue a task; the returned Future resolves to its result or error."""
        strategy = self.strategies.get(task.type)
        if strategy is None:
            raise InvalidInput(f"Unsupported lookup type: {task.type}")
        return self._executor.submit(self._run, strategy, task)

    @staticmethod
    def _run(strategy: Strategy, task: LookupTask) -> Any:
        logger.debug("Lookup task started", extra={"lookup_type": task.type})
        return strategy(task.contact)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
