"""
@file: logger.py
@description:
This module provides a unified logging system for the shop data layer, supporting:
- Color-coded console output for different log levels
- Consistent logging format across the application
- Configurable log levels based on environment settings

The module creates a default logger instance that can be imported and used
throughout the application, ensuring consistent logging patterns.

@dependencies:
- logging: Standard Python logging module
- sys: For stdout access
- colorama: For cross-platform colored terminal text

@notes:
- The default log level is read from the LOG_LEVEL environment variable; the
  full settings object is not required so that loggers can be created before
  configuration has been validated.
- The ColoredFormatter class adds ANSI color codes based on log level
- Loggers are configured once per name and never duplicate handlers
"""

import logging
import os
import sys
from typing import Optional

from colorama import Back, Fore, Style, init

# Initialize colorama
init(autoreset=True)

DEFAULT_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class ColoredFormatter(logging.Formatter):
    """
    Custom formatter that adds colors to log messages based on level.

    Warnings about models without associations and failed health checks
    stand out from the routine bootstrap chatter this way.
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.WHITE + Back.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record with appropriate color based on its level.

        Args:
            record: The log record to format

        Returns:
            str: The colored formatted log message
        """
        color = self.COLORS.get(record.levelno, "")

        # Color a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        record.msg = f"{color}{record.msg}{Style.RESET_ALL}"

        return super().format(record)


def get_console_handler() -> logging.StreamHandler:
    """
    Create and configure a console handler with colored output.

    Returns:
        logging.StreamHandler: Configured console handler
    """
    console_handler = logging.StreamHandler(sys.stdout)

    log_format = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
    formatter = ColoredFormatter(log_format, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler.setFormatter(formatter)
    return console_handler


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger with the specified name and level.

    Args:
        name: The logger name, typically a module path such as "app.db.lifecycle"
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               If None, uses the default from the environment

    Returns:
        logging.Logger: Configured logger instance
    """
    if level is None:
        level = DEFAULT_LOG_LEVEL

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logger = logging.getLogger(name)

    # Only add handlers if this logger doesn't have any
    if not logger.handlers:
        logger.setLevel(numeric_level)
        logger.addHandler(get_console_handler())
        logger.propagate = False

    return logger


def setup_logger(name: str = "app", level: Optional[str] = None) -> logging.Logger:
    """
    Set up and configure a logger with colored output.

    This is the main function that should be called to create loggers
    throughout the application.

    Args:
        name: The name of the logger
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Configured logger instance
    """
    return get_logger(name, level)


# Create default application logger
logger = setup_logger()


__all__ = ['setup_logger', 'get_logger', 'logger', 'ColoredFormatter']
