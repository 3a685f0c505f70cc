"""Logging configuration."""

import logging

from marketline.config.settings import get_settings


def setup_logging() -> None:
    """Configure application logging.

    The terminal belongs to curses while the dashboard runs, so records go
    to the log file instead of stdout.
    """
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(settings.get_log_file(), encoding="utf-8")],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
