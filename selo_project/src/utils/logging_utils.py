#!/usr/bin/env python3
"""Logging utilities for the Selo geometry kernel.

The kernel modules only ever call ``logging.getLogger(__name__)``; wiring
handlers is left to the host application, which can use
:func:`setup_logging` for a sensible console/file default.
"""

import logging
import os
import sys
from typing import Optional, Union

KERNEL_LOGGER = "selo_project"


def setup_logging(log_level: Union[int, str, None] = None,
                  log_file: Optional[str] = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the kernel logger.

    Args:
        log_level: Level as int or name (``"DEBUG"``, ``"INFO"``, ...). If
            None, the ``log_level`` setting is used.
        log_file: Optional path to a log file. If None, logs to console only.

    Returns:
        logging.Logger: The configured ``selo_project`` logger.

    """
    if log_level is None:
        from ..services.settings_service import SettingsService
        log_level = SettingsService().log_level()
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {log_level}")

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    kernel_logger = logging.getLogger(KERNEL_LOGGER)
    kernel_logger.setLevel(log_level)

    # Replace handlers from a previous call
    for handler in kernel_logger.handlers[:]:
        kernel_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    kernel_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        kernel_logger.addHandler(file_handler)

    kernel_logger.debug("Logging initialized")
    return kernel_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        Logger: Configured logger instance

    """
    return logging.getLogger(name)
