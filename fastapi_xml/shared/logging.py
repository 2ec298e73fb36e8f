"""
Logging setup for the ``fastapi_xml`` logger tree.

Only the package logger is configured; the root logger and the host
application's handlers are left alone. Rejections log at WARNING and
encode failures at ERROR. Request and response bodies are never logged.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "fastapi_xml"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _AdapterHandler(logging.StreamHandler):
    """Marks the handler installed by ``configure_logging``."""


def configure_logging(
    level: str = "INFO", stream: TextIO | None = None, propagate: bool = False
) -> logging.Logger:
    """Attach a formatted stream handler to the package logger.

    Calling it again replaces the handler it installed before, so the
    demo app can be created many times without duplicating log lines.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR). Unknown names
            fall back to INFO.
        stream: Where records go. Defaults to stdout.
        propagate: Also pass records on to the root logger.

    Returns:
        The configured ``fastapi_xml`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, _AdapterHandler)]:
        logger.removeHandler(handler)

    handler = _AdapterHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = propagate
    return logger
