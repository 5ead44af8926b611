"""
Logging utilities for the interpreter and the turtle drivers.
"""
import logging
import sys

from ..config import AppConfig

ROOT_LOGGER = "jlogo"

_configured = False


def setup_logger(level: str = None, log_file: str = None) -> logging.Logger:
    """Set up the package logger once and return it."""
    global _configured

    logger = logging.getLogger(ROOT_LOGGER)
    level = level or AppConfig.LOG_LEVEL
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    if _configured:
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    # Console handler, stdout belongs to the text turtle
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    logger.addHandler(console_handler)

    log_file = log_file if log_file is not None else AppConfig.LOG_FILE
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    _configured = True
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger below the package logger."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
