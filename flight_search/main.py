"""
Main entry point for the flight search aggregator.
"""

import logging
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the CLI and the HTTP server.

    Args:
        level: Log level name, defaults to the configured ``LOG_LEVEL``
    """
    if level is None:
        from .utils.config import get_config
        level = get_config().log_level

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main() -> None:
    """Main entry point for the ``flight-search`` command."""
    from .cli import app
    app()


if __name__ == "__main__":
    main()
