"""
Logging utilities for the splitting library.
"""
import logging
import sys

import config


def setup_logging(log_filename=None, level=None, log_format=None):
    """
    Set up logging to a file or, without a filename, to the console.
    Args:
        log_filename (str, optional): If provided, log to this file.
        level (int or str, optional): Root level, defaults to config.LOG_LEVEL.
        log_format (str, optional): Record format, defaults to config.LOG_FORMAT.
    """
    logger = logging.getLogger()
    logger.setLevel(level if level is not None else config.LOG_LEVEL)
    formatter = logging.Formatter(log_format or config.LOG_FORMAT)
    # Remove all handlers first (to avoid duplicate logs)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    if log_filename:
        handler = logging.FileHandler(log_filename)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def get_logger(name=None):
    return logging.getLogger(name)
