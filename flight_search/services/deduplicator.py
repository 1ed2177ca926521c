"""
Request coalescing for expensive cache-miss computations.

Concurrent callers asking for the same key share one in-flight task, so
the wrapped operation runs at most once per key while it is pending. This
is the in-process counterpart of lock-based cache stampede prevention.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from .events import SearchEventLog, SearchEventType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestDeduplicator:
    """
    Coalesces concurrent calls for the same key into one computation.

    Every caller for a pending key receives the same result object, or the
    same exception. The key is removed as soon as the computation settles,
    so the next call starts a fresh one. Waiters are shielded: cancelling
    one caller never cancels the shared computation.
    """

    def __init__(self, events: Optional[SearchEventLog] = None):
        self.events = events or SearchEventLog()
        self._in_flight: Dict[str, "asyncio.Task[Any]"] = {}

    async def deduplicate(self, key: str, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``operation`` for ``key`` unless an identical run is pending.

        Args:
            key: Coalescing key
            operation: Zero-argument callable producing the awaitable to share

        Returns:
            The shared result of the computation
        """
        task = self._in_flight.get(key)
        if task is not None:
            logger.debug(f"Reusing in-flight request: {key}")
            self.events.emit(SearchEventType.DEDUP_REUSED, key=key)
            return await asyncio.shield(task)

        async def run() -> T:
            try:
                return await operation()
            finally:
                if self._in_flight.get(key) is asyncio.current_task():
                    del self._in_flight[key]

        task = asyncio.ensure_future(run())
        task.add_done_callback(_retrieve_exception)
        self._in_flight[key] = task
        return await asyncio.shield(task)

    @property
    def in_flight_count(self) -> int:
        """Number of keys with a pending computation."""
        return len(self._in_flight)

    def clear(self) -> None:
        """Forget pending computations. Running tasks are left to finish."""
        self._in_flight.clear()


def _retrieve_exception(task: "asyncio.Task[Any]") -> None:
    # Marks the failure as retrieved when every waiter was cancelled
    if not task.cancelled():
        task.exception()
