"""
Structured event sink for search observability.

Components report what happened during a search (cache hits, retries,
failed provider branches, coalesced requests) through a ``SearchEventLog``
injected at construction. The log keeps a bounded history of events for
inspection and forwards each one to the standard logging system.
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, List

logger = logging.getLogger(__name__)


class SearchEventType(str, Enum):
    """Points in the search flow that emit events."""
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    DEDUP_REUSED = "dedup_reused"
    RETRY_ATTEMPT = "retry_attempt"
    PROVIDER_FAILED = "provider_failed"
    SEARCH_COMPLETED = "search_completed"


_LOG_LEVELS = {
    SearchEventType.PROVIDER_FAILED: logging.WARNING,
    SearchEventType.RETRY_ATTEMPT: logging.INFO,
    SearchEventType.SEARCH_COMPLETED: logging.INFO,
}


@dataclass
class SearchEvent:
    """A single observability event."""
    event_type: SearchEventType
    fields: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            **self.fields,
        }


class SearchEventLog:
    """
    Bounded, in-memory record of search events.

    Each emitted event is appended to the history (oldest events are
    dropped past ``max_events``) and logged with its fields attached as
    ``extra`` so structured log handlers can pick them up.
    """

    def __init__(self, max_events: int = 1000):
        self._events: Deque[SearchEvent] = deque(maxlen=max_events)

    def emit(self, event_type: SearchEventType, **fields: Any) -> SearchEvent:
        """Record an event and forward it to the logger."""
        event = SearchEvent(event_type=event_type, fields=fields)
        self._events.append(event)

        level = _LOG_LEVELS.get(event_type, logging.DEBUG)
        if logger.isEnabledFor(level):
            details = " ".join(f"{key}={value}" for key, value in fields.items())
            logger.log(level, "%s %s", event_type.value, details, extra={"search_event": event.to_dict()})
        return event

    @property
    def events(self) -> List[SearchEvent]:
        return list(self._events)

    def events_of(self, event_type: SearchEventType) -> List[SearchEvent]:
        """Return recorded events of one type, oldest first."""
        return [event for event in self._events if event.event_type == event_type]

    def counts(self) -> Dict[str, int]:
        """Count recorded events per type."""
        return dict(Counter(event.event_type.value for event in self._events))

    def clear(self) -> None:
        self._events.clear()
