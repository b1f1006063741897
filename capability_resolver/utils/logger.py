"""Logging configuration."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "CAPABILITY_RESOLVER_LOG_LEVEL"


def _configured_level() -> int:
    """Resolve the log level from the environment, falling back to INFO."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or "capability_resolver")

    # Only configure if no handlers exist
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_configured_level())

    return logger
