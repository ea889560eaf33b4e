"""
Logging setup for the attribution pipeline.
"""

import logging
from typing import Optional


DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, log_format: Optional[str] = None):
    """
    Route pipeline logs to stderr, and also to `log_file` when one is given.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. once per CLI run) does not duplicate output.
    """
    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=getattr(logging, level.upper()), handlers=handlers, force=True)
