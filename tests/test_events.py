"""
Tests for the structured search event sink.
"""

import logging

from flight_search.services import SearchEventLog, SearchEventType


class TestSearchEventLog:
    """Test event recording and inspection."""

    def test_emit_records_event(self):
        """Test emitted events keep their type and fields."""
        log = SearchEventLog()
        event = log.emit(SearchEventType.CACHE_MISS, key="flight:search:{}")

        assert log.events == [event]
        assert event.fields == {"key": "flight:search:{}"}

    def test_events_of_and_counts(self):
        """Test filtering and counting by type."""
        log = SearchEventLog()
        log.emit(SearchEventType.CACHE_MISS, key="a")
        log.emit(SearchEventType.CACHE_HIT, key="a")
        log.emit(SearchEventType.CACHE_HIT, key="a")

        assert len(log.events_of(SearchEventType.CACHE_HIT)) == 2
        assert log.counts() == {"cache_miss": 1, "cache_hit": 2}

    def test_history_is_bounded(self):
        """Test the oldest events are dropped past the limit."""
        log = SearchEventLog(max_events=2)
        for attempt in range(5):
            log.emit(SearchEventType.RETRY_ATTEMPT, attempt=attempt)

        assert [e.fields["attempt"] for e in log.events] == [3, 4]

    def test_clear(self):
        """Test clearing drops the history."""
        log = SearchEventLog()
        log.emit(SearchEventType.CACHE_MISS)
        log.clear()
        assert log.events == []

    def test_to_dict(self):
        """Test events serialize with their type and fields."""
        event = SearchEventLog().emit(SearchEventType.PROVIDER_FAILED, provider="GDS")
        data = event.to_dict()
        assert data["event_type"] == "provider_failed"
        assert data["provider"] == "GDS"
        assert "timestamp" in data


class TestEventLogging:
    """Test events are forwarded to the logging system."""

    def test_provider_failure_logged_as_warning(self, caplog):
        """Test failed provider branches surface as warnings."""
        with caplog.at_level(logging.DEBUG, logger="flight_search.services.events"):
            SearchEventLog().emit(SearchEventType.PROVIDER_FAILED, provider="NDC", error="503")

        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "provider_failed" in record.getMessage()
        assert record.search_event["provider"] == "NDC"

    def test_cache_events_logged_at_debug(self, caplog):
        """Test cache hits are debug-level noise."""
        with caplog.at_level(logging.INFO, logger="flight_search.services.events"):
            SearchEventLog().emit(SearchEventType.CACHE_HIT, key="k")

        assert caplog.records == []
