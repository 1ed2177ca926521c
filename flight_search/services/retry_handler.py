"""
Retry with exponential backoff for upstream provider calls.

Transient failures (timeouts, connection resets, HTTP 429/503) are retried
with an exponentially growing delay. Any other error is propagated at once,
without consuming the remaining attempts.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from .events import SearchEventLog, SearchEventType

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRYABLE_ERRORS: Tuple[str, ...] = (
    "timeout",
    "timed out",
    "etimedout",
    "connection reset",
    "connectionreset",
    "econnreset",
    "429",
    "503",
)


@dataclass(frozen=True)
class RetryOptions:
    """Retry policy of a single ``execute`` call. Delays are in seconds."""
    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    retryable_errors: Tuple[str, ...] = DEFAULT_RETRYABLE_ERRORS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Backoff delay after the given (1-based) failed attempt."""
        return min(self.max_delay, self.initial_delay * self.backoff_multiplier ** (attempt - 1))


def is_retryable(error: BaseException, retryable_errors: Tuple[str, ...]) -> bool:
    """
    Check whether an error matches one of the retryable patterns.

    The error is rendered as ``"<ExceptionClass>: <message>"`` and matched
    case-insensitively, so a bare ``TimeoutError()`` counts as a timeout.
    """
    error_string = f"{type(error).__name__}: {error}".lower()
    return any(pattern.lower() in error_string for pattern in retryable_errors)


class RetryHandler:
    """
    Bounded exponential-backoff retry around an async operation.

    Sleeping between attempts suspends only the retrying task.
    """

    def __init__(
        self,
        defaults: Optional[RetryOptions] = None,
        events: Optional[SearchEventLog] = None,
    ):
        self.defaults = defaults or RetryOptions()
        self.events = events or SearchEventLog()

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        options: Optional[RetryOptions] = None,
        **overrides: Any,
    ) -> T:
        """
        Run ``operation`` until it succeeds or the retry policy gives up.

        Args:
            operation: Zero-argument callable returning a fresh awaitable per attempt
            options: Policy for this call, defaults to the handler's policy
            **overrides: Individual ``RetryOptions`` fields to override

        Returns:
            The operation's result

        Raises:
            The first non-retryable error, or the last error once attempts are exhausted
        """
        opts = options or self.defaults
        if overrides:
            opts = replace(opts, **overrides)

        last_error: Optional[Exception] = None

        for attempt in range(1, opts.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_error = e

                if attempt == opts.max_attempts:
                    break

                if not is_retryable(e, opts.retryable_errors):
                    raise

                delay = opts.delay_for(attempt)
                self.events.emit(
                    SearchEventType.RETRY_ATTEMPT,
                    attempt=attempt,
                    max_attempts=opts.max_attempts,
                    delay_seconds=delay,
                    error=str(e),
                )
                await self._sleep(delay)

        raise last_error

    async def _sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
