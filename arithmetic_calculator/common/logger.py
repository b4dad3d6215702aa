"""Package-wide logger."""
import logging
import sys
from typing import Union

LOGGER_NAME: str = "arithmetic_calculator"
LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Calling it again only updates the level, no second handler is added.

    :param level: Logging level name or number

    :return: The configured package logger
    :rtype: logging.Logger
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
