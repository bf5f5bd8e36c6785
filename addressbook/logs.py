"""Logging configuration."""
import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}


def setup_logging(level='warning', log_file=None):
    """Configure the package logger: Rich output on stderr and, if
    requested, a plain log file.

    Args:
        level (str):        a level name from LOG_LEVELS.
        log_file (str):     path to a log file, or None.

    Returns:
        logger (Logger):    the configured package logger.

    Raises:
        ValueError: if the level name is unknown.

    """
    try:
        log_level = LOG_LEVELS[str(level).lower()]
    except KeyError:
        raise ValueError(f"invalid log level '{level}'") from None

    logger = logging.getLogger("addressbook")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
