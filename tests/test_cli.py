"""
Tests for the command line interface.
"""

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from flight_search.cli import app, format_duration, format_time
from flight_search.main import main, setup_logging

runner = CliRunner()


@pytest.fixture
def patched_aggregator(aggregator):
    with patch("flight_search.cli.build_aggregator", return_value=aggregator):
        yield aggregator


class TestFormatting:
    """Test output helpers."""

    def test_format_time(self):
        """Test sub-second times are shown in milliseconds."""
        assert format_time(0.25) == "250ms"
        assert format_time(1.5) == "1.50s"

    def test_format_duration(self):
        """Test durations are shown as hours and minutes."""
        assert format_duration(375) == "6h 15m"
        assert format_duration(59) == "0h 59m"


class TestSearchCommand:
    """Test the search command."""

    def test_search(self, patched_aggregator, providers):
        """Test a search renders flights and provider status."""
        result = runner.invoke(app, ["search", "JFK", "LAX", "2025-12-15"])

        assert result.exit_code == 0, result.output
        assert "JFK → LAX" in result.output
        assert "Providers" in result.output
        assert all(p.call_count == 1 for p in providers)

    def test_repeat_uses_cache(self, patched_aggregator, providers):
        """Test repeated searches are answered from the cache."""
        result = runner.invoke(app, ["search", "JFK", "LAX", "2025-12-15", "--repeat", "3"])

        assert result.exit_code == 0, result.output
        assert result.output.count("served from cache") == 2
        assert all(p.call_count == 1 for p in providers)
        assert patched_aggregator.get_cache_stats().hits == 2

    def test_invalid_airport(self, patched_aggregator, providers):
        """Test invalid input exits with a usage error and no upstream calls."""
        result = runner.invoke(app, ["search", "J1K", "LAX", "2025-12-15"])

        assert result.exit_code == 2
        assert "Invalid search" in result.output
        assert all(p.call_count == 0 for p in providers)

    def test_invalid_cabin_class(self, patched_aggregator):
        """Test unknown cabin classes are rejected by the parser."""
        result = runner.invoke(app, ["search", "JFK", "LAX", "2025-12-15", "--cabin-class", "luxury"])
        assert result.exit_code != 0


class TestStampedeCommand:
    """Test the stampede demonstration."""

    def test_stampede_coalesces_requests(self, patched_aggregator, providers):
        """Test concurrent identical searches trigger a single fan-out."""
        result = runner.invoke(app, ["stampede", "--requests", "10"])

        assert result.exit_code == 0, result.output
        assert "Stampede Prevention Metrics" in result.output
        assert all(p.call_count == 1 for p in providers)


class TestEntryPoint:
    """Test logging setup and the console script entry point."""

    def test_setup_logging_uses_level(self):
        """Test the requested level is passed to basicConfig."""
        with patch("flight_search.main.logging.basicConfig") as mock_basic_config:
            setup_logging("debug")

        assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_setup_logging_defaults_to_config(self, monkeypatch):
        """Test the configured LOG_LEVEL is used when no level is given."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        with patch("flight_search.main.logging.basicConfig") as mock_basic_config:
            setup_logging()

        assert mock_basic_config.call_args.kwargs["level"] == logging.WARNING

    def test_main_runs_cli(self):
        """Test the entry point dispatches to the typer app."""
        with patch("flight_search.cli.app") as mock_app:
            main()

        mock_app.assert_called_once_with()
