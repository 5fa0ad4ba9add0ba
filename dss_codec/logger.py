import logging
import sys

LOGGER_NAME = 'dss_codec'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Global verbose flag that can be set by the command line tool
verbose_mode = False

_console_handler = None


def setup_logger():
    """
    Configure and return the application logger.

    Module loggers created with ``logging.getLogger(__name__)`` inside the
    package are children of this logger and share its console handler.
    The handler is rebuilt on every call so it follows the verbose flag and
    the current ``sys.stderr``.

    Returns:
        A configured logger instance
    """
    global _console_handler

    logger = logging.getLogger(LOGGER_NAME)

    # change the log level no matter if it has been set up or not based on verbosity
    level = logging.DEBUG if verbose_mode else logging.INFO
    logger.setLevel(level)

    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setLevel(level)
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(_console_handler)

    return logger


def set_verbose_mode(verbose):
    """Set the global verbose mode flag."""
    global verbose_mode
    verbose_mode = verbose


def get_logger():
    """
    Get a logger configured with the application's global verbose setting.

    Returns:
        A configured logger instance
    """
    return setup_logger()
