#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the logging setup shared by the installer commands.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from installer.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

DETAILED_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"
SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = "{log_prefix}%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
SIMPLE_LOG_FORMAT_NO_PREFIX = (
    "%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
)

_LEVEL_SYMBOL_KEYS: Dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}


class SymbolFormatter(logging.Formatter):
    """
    A custom formatter that adds symbols to log messages based on the log level.
    """

    def __init__(
        self, fmt=None, datefmt=None, style="%", validate=True, symbols=None
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        symbol_key = _LEVEL_SYMBOL_KEYS.get(record.levelno)
        record.symbol = (
            self.symbols.get(symbol_key, SYMBOLS_DEFAULT.get(symbol_key, ""))
            if symbol_key
            else ""
        )
        return super().format(record)


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures logging for the installer.

    Log records can be directed to a file, the console (stderr, so that
    command output on stdout stays clean), or both. When neither is requested
    a console handler is installed anyway.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        The file path for the log file. Defaults to None.
    log_to_console: bool
        Whether to log to the console. Defaults to True.
    log_format_str: Optional[str]
        A custom log format string. May contain a ``{log_prefix}`` placeholder.
    log_prefix: Optional[str]
        An optional string to prefix log messages with.
    symbols: Optional[Dict[str, str]]
        Level symbols for the SymbolFormatter. Defaults to SYMBOLS_DEFAULT.

    Returns:
    None
    """
    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file_path, mode="a")
            handlers.append(file_handler)
        except Exception as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        handlers.append(console_handler)

    if not handlers:  # pragma: no cover
        handlers.append(logging.StreamHandler(sys.stderr))

    final_format_str: str
    actual_prefix = (
        (log_prefix.strip() + " ")
        if log_prefix and log_prefix.strip()
        else ""
    )

    if log_format_str:
        if "{log_prefix}" in log_format_str:
            final_format_str = log_format_str.format(log_prefix=actual_prefix)
        else:
            final_format_str = actual_prefix + log_format_str
    elif actual_prefix:
        final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
            log_prefix=actual_prefix
        )
    else:
        final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX

    formatter = SymbolFormatter(
        fmt=final_format_str,
        datefmt="%Y-%m-%d %H:%M:%S",
        symbols=symbols,
    )

    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
