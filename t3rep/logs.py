"""
Logging sinks.

Two independent loggers are used: errors are always printed to stderr, while
informational messages only reach stdout in verbose mode. The pair is carried
around in a Logs object instead of going through the root logger.
"""

import logging
import sys
from dataclasses import dataclass


ERROR_LOGGER = 't3rep.error'
INFO_LOGGER = 't3rep.info'

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class Logs:
    """Error and info log sinks."""
    err: logging.Logger
    info: logging.Logger


def _reset(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(verbose=False, log_file=None):
    """Setup the error and info loggers.

    Args:
        verbose: If True, info messages are printed to stdout
        log_file: Optional path of a log file receiving both sinks at DEBUG level

    Returns:
        Logs: The configured logger pair
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    err = logging.getLogger(ERROR_LOGGER)
    info = logging.getLogger(INFO_LOGGER)
    for logger in (err, info):
        _reset(logger)
        logger.propagate = False

    # Error handler (stderr) - always enabled
    err.setLevel(logging.DEBUG)
    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    err.addHandler(error_handler)

    # Info handler (stdout) - only in verbose mode
    info.setLevel(logging.DEBUG)
    if verbose:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        info.addHandler(console_handler)
    elif log_file is None:
        info.addHandler(logging.NullHandler())

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        err.addHandler(file_handler)
        info.addHandler(file_handler)

    return Logs(err=err, info=info)
