"""Logging setup shared by every module of the package.

Modules obtain loggers with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to attach a rich console handler.
"""

import logging
from pathlib import Path

from rich.logging import RichHandler

PACKAGE_LOGGER = "cdk_schema_generator"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package namespace."""
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str | int = "WARNING", log_file: str | Path | None = None
) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level name or number for the console handler.
        log_file: Optional path that additionally receives DEBUG output.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)

    # Drop handlers from a previous call so repeated setup stays idempotent
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        rich_tracebacks=True, show_path=False, markup=False
    )
    console_handler.setLevel(level.upper() if isinstance(level, str) else level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
