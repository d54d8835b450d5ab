"""
Logging for the insight engine.

Every module asks for ``get_logger(__name__)``; records flow up to the
``insight_engine`` logger, whose handlers are installed by ``setup_logger``
(colored console, optionally a log file).
"""

import logging
import sys
from pathlib import Path
from typing import Optional
import colorlog


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}


def _console_handler(colorize: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if colorize:
        handler.setFormatter(colorlog.ColoredFormatter(
            '%(log_color)s' + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
        ))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: str = "INFO",
    colorize: bool = True
) -> logging.Logger:
    """
    (Re)configure a logger's handlers and level.

    Calling it again replaces the previous handlers, so the engine can apply
    the configured level after modules have already logged with defaults.

    Args:
        name: Logger name, usually 'insight_engine'
        log_file: Also write plain-text records to this path
        level: Level name such as 'DEBUG' or 'WARNING'
        colorize: Color console records by level

    Returns:
        The configured logger

    Example:
        >>> logger = setup_logger("insight_engine", level="DEBUG")
        >>> logger.info("Summarizing dataset: sales.csv")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    logger.handlers = [_console_handler(colorize)]
    if log_file:
        logger.addHandler(_file_handler(log_file))

    # Child loggers of the package propagate here; stop before the root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Loggers inside the ``insight_engine`` package propagate to the package
    logger, which is configured with defaults on first use. Any other name
    gets its own default handlers.
    """
    root_name = name.split('.')[0]
    if root_name == 'insight_engine' and name != root_name:
        package_logger = logging.getLogger(root_name)
        if not package_logger.handlers:
            setup_logger(root_name)
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    if not logger.handlers:
        logger = setup_logger(name)

    return logger
