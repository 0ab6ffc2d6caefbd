"""
Custom logger for the ec2-driver project
"""

# Imports
import logging
from typing import Optional

# Internal imports
from ec2_driver.constants import DEFAULT_LOGGER_NAME
from ec2_driver.ui import (
    CYAN,
    YELLOW,
    RED,
    ORANGE_BROWN,
    RESET,
)


# Logger
DEFAULT_LOGGER = logging.getLogger(DEFAULT_LOGGER_NAME)


# Formatting class
class FormatterWithAnsi(logging.Formatter):

    logging_format = "%(asctime)s | {color}{level}{reset} | %(message)s"
    logging_notset_format = "%(message)s"

    FORMATS = {
        logging.INFO: logging_format.format(color=CYAN, level="INFO ", reset=RESET),
        logging.WARNING: logging_format.format(color=YELLOW, level="WARN ", reset=RESET),  # noqa: E501
        logging.ERROR: logging_format.format(color=RED, level="ERROR", reset=RESET),
        logging.DEBUG: logging_format.format(
            color=ORANGE_BROWN, level="DEBUG", reset=RESET
        ),
        logging.NOTSET: logging_notset_format,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, self.logging_notset_format)
        formatter = logging.Formatter(log_fmt, "%H:%M:%S")
        return formatter.format(record)


def set_up_logger(
    log_level: Optional[str],
    logger: logging.Logger = DEFAULT_LOGGER
) -> logging.Logger:
    """
    Set up the logger. Calling this function more than once (e.g., from several CLI
    invocations in the same process) replaces the console handler rather than adding
    a second one.
    """
    def _set_level(obj, level: Optional[str]):
        if level == 'info':
            obj.setLevel(logging.INFO)
        elif level == 'warn':
            obj.setLevel(logging.WARN)
        elif level == 'error':
            obj.setLevel(logging.ERROR)
        elif level == 'debug':
            obj.setLevel(logging.DEBUG)
        else:
            obj.setLevel(logging.NOTSET)
        return obj

    # Set the appropriate log level
    logger = _set_level(logger, log_level)

    # Stream handler
    for h in list(logger.handlers):
        if isinstance(h.formatter, FormatterWithAnsi):
            logger.removeHandler(h)
    handler = logging.StreamHandler()
    handler = _set_level(handler, log_level)
    handler.setFormatter(FormatterWithAnsi())
    logger.addHandler(handler)
    return logger
