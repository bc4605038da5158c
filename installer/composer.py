# installer/composer.py
# -*- coding: utf-8 -*-
"""
Wrapper around the Composer dependency manager.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional

from common.command_utils import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    command_exists,
    log_installer,
    stream_command,
)

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


class ComposerProcess:
    """
    Runs Composer commands inside the application base path.

    Output is streamed to the callback given to ``set_callback`` while the
    command runs; the exit status of the most recent command is available
    from ``last_exit_code``.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        base_path: Optional[Path] = None,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.base_path = Path(base_path or app_settings.base_path)
        self.logger = current_logger if current_logger else module_logger
        self._callback: Optional[Callable[[str], None]] = None
        self._last_exit_code: Optional[int] = None

    def set_callback(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def last_exit_code(self) -> Optional[int]:
        return self._last_exit_code

    def get_environment(self) -> Dict[str, str]:
        """Environment for Composer; supplies COMPOSER_HOME when it cannot be derived."""
        env = dict(os.environ)
        if not env.get("COMPOSER_HOME") and not env.get("HOME"):
            env["COMPOSER_HOME"] = str(self.base_path / "storage" / "composer")
        return env

    def run(self, args: List[str]) -> int:
        """
        Run ``composer <args>`` and return its exit code.

        A bare executable name that is not on PATH is reported without
        starting a process, with the shell's "command not found" status.
        """
        executable = self.app_settings.composer_command
        if not os.path.dirname(executable) and not command_exists(executable):
            log_installer(
                f"{self.app_settings.symbols.get('error', '❌')} Composer executable '{executable}' was not found in PATH. Install Composer or set composer_command.",
                "error",
                self.logger,
                self.app_settings,
            )
            self._last_exit_code = COMMAND_NOT_FOUND_EXIT_CODE
            return self._last_exit_code

        command = [executable, *args]
        self._last_exit_code = stream_command(
            command,
            self.app_settings,
            output_callback=self._callback,
            cwd=str(self.base_path),
            env=self.get_environment(),
            current_logger=self.logger,
        )
        return self._last_exit_code

    def require(
        self, packages: List[str], extra_args: Optional[List[str]] = None
    ) -> int:
        """Require ``packages`` (``name:constraint`` strings) into the project."""
        log_installer(
            f"{self.app_settings.symbols.get('package', '📦')} Requiring {', '.join(packages)}",
            "info",
            self.logger,
            self.app_settings,
        )
        return self.run(
            ["require", *packages, "--no-interaction", *(extra_args or [])]
        )
