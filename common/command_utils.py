# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing shell commands and logging their output.
"""

import logging
import shutil
import subprocess
from typing import Callable, Dict, List, Optional

from installer.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)

# Exit status reported when the executable cannot be found, as a shell would.
COMMAND_NOT_FOUND_EXIT_CODE = 127


def log_installer(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs messages to an installer logger at a defined logging level. It supports
    different logging levels and an option to include exception information.

    Args:
        message (str): The log message to be recorded.
        level (str): The severity level of the log message. Defaults to "info". Common options
            include "debug", "info", "success", "warning", "error", and "critical".
            "success" is recorded at info level.
        current_logger (Optional[logging.Logger]): A logger instance to use for logging. If not provided,
            a module-level logger will be used.
        app_settings (Optional[AppSettings]): Optional application settings that can influence logging behavior.
        exc_info (bool): Indicator to include exception details in the log. By default, this is set to False.

    Returns:
        None
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    return (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.

    Parameters:
        command_name (str): The name of the command to check for existence.

    Returns:
        bool: True if the command is found in the system's PATH, False otherwise.
    """
    return shutil.which(command_name) is not None


def stream_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    output_callback: Optional[Callable[[str], None]] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Executes a command and hands its output to a callback while it runs.

    Standard output and standard error are merged, read line by line and
    passed to ``output_callback`` unchanged (trailing newlines included).
    A non-zero exit code is returned to the caller rather than raised.

    Args:
        command (List[str]): The command and its arguments.
        app_settings (Optional[AppSettings]): Settings providing logging symbols.
        output_callback (Optional[Callable[[str], None]]): Receives every output
            chunk. When omitted, output lines are logged at debug level.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command. Defaults to
            the inherited environment of the current process.
        current_logger (Optional[logging.Logger]): Logger to use.

    Returns:
        int: The exit code of the command, or 127 when the executable is missing.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_to_log_str = subprocess.list2cmdline(command)

    log_installer(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}",
        "info",
        effective_logger,
        app_settings,
    )
    try:
        with subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
            cwd=cwd,
            env=env,
        ) as process:
            for output_line in process.stdout or []:
                if output_callback:
                    output_callback(output_line)
                else:
                    log_installer(
                        f"   {output_line.rstrip()}",
                        "debug",
                        effective_logger,
                        app_settings,
                    )
            return_code = process.wait()
    except FileNotFoundError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        return COMMAND_NOT_FOUND_EXIT_CODE

    if return_code != 0:
        log_installer(
            f"{symbols.get('error', '❌')} Command `{command_to_log_str}` failed (rc {return_code}).",
            "error",
            effective_logger,
            app_settings,
        )
    else:
        log_installer(
            f"{symbols.get('success', '✅')} Command `{command_to_log_str}` completed.",
            "debug",
            effective_logger,
            app_settings,
        )
    return return_code
