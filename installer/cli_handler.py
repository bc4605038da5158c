# installer/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) prompts for the installer commands.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_installer

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


def cli_prompt_for_value(
    prompt_message: str,
    app_settings: AppSettings,
    default: str = "",
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Ask the user for a value on the CLI, showing the default in brackets.

    Parameters:
    prompt_message : str
        The question to display.
    app_settings : AppSettings
        The application settings object providing symbols.
    default : str
        Returned for an empty answer, and when input reaches end-of-file.
    current_logger : Optional[logging.Logger]
        The logger instance to use for logging.

    Returns:
    str
        The stripped answer, or ``default``.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    suffix = f" [{default}]" if default else ""
    try:
        answer = input(
            f"   {symbols.get('info', 'ℹ️')} {prompt_message}{suffix}: "
        ).strip()
    except EOFError:
        log_installer(
            f"{symbols.get('warning', '!')} No user input (EOF), using default for prompt: '{prompt_message}'",
            "warning",
            logger_to_use,
            app_settings,
        )
        return default
    return answer or default
