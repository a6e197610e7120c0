"""Logging configuration for the application."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> int:
    """Configure root logging to stdout.

    Args:
        level: Level name; defaults to the LOG_LEVEL environment variable,
            then INFO.

    Returns:
        The numeric level that was applied
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level_int = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=log_level_int,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    return log_level_int
