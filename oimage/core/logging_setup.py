"""
Logging configuration for OImage entry points.
The library modules only create loggers; handlers are installed here.
"""

import logging
import sys
from typing import Optional

from oimage.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configures the 'oimage' logger with a stderr handler.

    Args:
        level: Log level name. Defaults to settings value.
    """
    level_name = (level or get_settings().log_level).upper()

    logger = logging.getLogger("oimage")
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    # stdout is reserved for encoded image bytes
    if not any(getattr(h, "_oimage_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._oimage_handler = True
        logger.addHandler(handler)
