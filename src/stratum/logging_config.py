"""Logging setup for hosts that do not configure logging themselves."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s | %(name)-40s | %(levelname)-8s | %(message)s"


def setup_logging(
    log_level: str = "INFO",
    format_string: str | None = None,
    force_configure: bool = False,
) -> None:
    """Configure the root logger once.

    Existing handlers are left alone unless force_configure is set.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force_configure:
        return

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())
    logging.getLogger("psycopg").setLevel(logging.WARNING)
