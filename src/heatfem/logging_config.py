"""
Logging Setup
=============
Attaches handlers to the ``heatfem`` logger for command-line runs. Library code
only creates module loggers; nothing is printed until ``setup_logging`` is called.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route heatfem log records to stdout and, optionally, to a file.

    Calling it again replaces the previous handlers, closing any open log file,
    so several runs in one interpreter do not duplicate records.

    Args:
        level: Threshold for the logger and every handler, e.g. logging.DEBUG.
        log_file: Log file path, truncated at the start of the run.
    """
    logger = logging.getLogger("heatfem")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to stdout{f' and {log_file}' if log_file else ''} at level {logging.getLevelName(level)}.")
