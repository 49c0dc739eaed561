"""
Logging setup for ts-expect-error.

The check report owns stdout, so log records always go to stderr through
rich. Verbosity comes from ``CheckSettings.verbosity``:

    quiet    ERROR and above
    normal   WARNING and above (dropped global diagnostics, aborted files)
    verbose  DEBUG, including one record per checked annotation
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "ts_expect_error"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route ts_expect_error log records to a rich handler on stderr.

    Args:
        verbosity: One of "quiet", "normal", "verbose"
        log_file: Also append plain-text records to this file

    Returns:
        The ts_expect_error root logger
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    debug = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_time=debug,
            show_path=debug,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    # replaces the handlers of an earlier call in the same process
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger below the ``ts_expect_error`` namespace, e.g. for ``__name__``."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
