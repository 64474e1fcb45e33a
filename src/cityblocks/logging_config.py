"""
Logging Configuration
Sets up the 'cityblocks' logger used by the loader, the layout and the window.
"""
import logging
import sys
from typing import Optional

from cityblocks.config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that are chatty at INFO/DEBUG
NOISY_LOGGERS = ("urllib3", "requests", "PIL")


def setup_logging(level: int = LOG_LEVEL, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the package logger with a stdout handler and an optional file.

    Args:
        level: Logging level (e.g. logging.DEBUG to see every rejected CSV row).
        log_file: Optional path to save logs to a file.

    Returns:
        The configured 'cityblocks' logger.
    """
    logger = logging.getLogger("cityblocks")
    logger.setLevel(level)

    # Calling twice (e.g. from tests) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
