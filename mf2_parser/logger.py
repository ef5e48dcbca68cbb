"""
Logging configuration for the microformats2 parser.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "mf2_parser",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only the level changes on repeated calls; handlers are attached once
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Package logger, configured once at import time. WARNING keeps library
# calls quiet; MicroformatsParser(log_level=...) or the CLI raise it.
logger = setup_logger(level=logging.WARNING)


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Child loggers (e.g. "mf2_parser.walker") propagate to the package
    logger, so their name shows which component produced each message.

    Args:
        module_name: Name of the module (e.g., 'walker', 'rels')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"mf2_parser.{module_name}")
