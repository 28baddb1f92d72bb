"""
Logging Configuration
Sets up the 'mini_calendar' logger from the loaded settings.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "mini_calendar"

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler, plus a file handler when ``log_file`` is set.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Path from the ``log_file`` setting, or None for stdout only.

    Returns:
        The configured 'mini_calendar' logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # Only our own handlers are replaced
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (file: %s).", log_file or "none")
    return logger
