# installer/setup_builder.py
# -*- coding: utf-8 -*-
"""
Shared logic for the installer commands.

``SetupBuilder`` installs the core packages with Composer, activates the
project license, prints the banners and follow-up hints, and prepares the
application's ``.env`` file. The console output, the message lookup and the
process start time are all handed in by the command that uses it.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from common.command_utils import get_symbols, log_installer
from common.file_utils import (
    add_paths_to_gitignore,
    copy_env_template,
    get_env_var,
    is_writable,
    refresh_env_vars,
    set_env_var,
)
from common.json_utils import inject_json_to_file
from common.lang_loader import Translator

from .composer import ComposerProcess
from .config_models import NON_INTERACTIVE_THRESHOLD_SECONDS, AppSettings
from .exceptions import ActivationError, ComposerConfigError
from .output import Reporter
from .update_manager import UpdateManager

module_logger = logging.getLogger(__name__)

INTRO_BANNER = [
    ".~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~. ",
    "                                                                      ",
    " .d888b.   .o888b.   db  .d888b.  d8888b. d88888b d8888b.  .d88b.     ",
    ".8P   Y8. d8P   Y8   88 .8P   Y8. 88  `8D 88'     88  `8D .8',, `8    ",
    "88     88 8P     oooo88 88     88 88oooY' 88oooo  88oobY' 8. ||  `8   ",
    "88     88 8b     ~~~~88 88     88 88~~~b. 88~~~~  88`8b   8. ||// 8   ",
    "`8b   d8' Y8b   d8   88 `8b   d8' 88   8D 88.     88 `88. `8 || d'    ",
    " `Y888P'   `Y888P'   YP  `Y888P'  Y8888P' Y88888P 88   YD  `.88P'     ",
    "                                                                      ",
    "`=========================== INSTALLATION ==========================' ",
    "",
]

OUTRO_BANNER = [
    ".~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~.",
    "                ,@@@@@@@,                  ",
    "        ,,,.   ,@@@@@@/@@,  .oo8888o.      ",
    r"     ,&%%&%&&%,@@@@@/@@@@@@,8888\88/8o     ",
    r"    ,%&\%&&%&&%,@@@\@@@/@@@88\88888/88'    ",
    r"    %&&%&%&/%&&%@@\@@/ /@@@88888\88888'    ",
    r"    %&&%/ %&%%&&@@\ V /@@' `88\8 `/88'     ",
    r"    `&%\ ` /%&'    |.|        \ '|8'       ",
    "        |o|        | |         | |         ",
    "        |.|        | |         | |         ",
    "`========= INSTALLATION COMPLETE ========='",
    "",
]


class SetupBuilder:
    """
    Helper operations shared by the ``install``, ``project:set`` and ``build``
    commands.

    Args:
        app_settings: Resolved installer settings.
        reporter: Where user-facing output goes.
        translator: Message lookup for user-facing text.
        update_manager: Gateway client. Built from the settings when omitted.
        composer_factory: Creates the Composer process for an install.
        start_time: When the process started, in ``clock`` units. Defaults to
            the clock value at construction.
        clock: Time source used by ``non_interactive_check``.
        want: Version constraint requested on the command line, if any.
        current_logger: Logger to use instead of the module logger.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        reporter: Reporter,
        translator: Translator,
        update_manager: Optional[UpdateManager] = None,
        composer_factory: Callable[..., ComposerProcess] = ComposerProcess,
        start_time: Optional[float] = None,
        clock: Callable[[], float] = time.time,
        want: Optional[str] = None,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.reporter = reporter
        self.translator = translator
        self.update_manager = (
            update_manager
            if update_manager is not None
            else UpdateManager(app_settings, current_logger=current_logger)
        )
        self.composer_factory = composer_factory
        self.clock = clock
        self.start_time = start_time if start_time is not None else clock()
        self.want = want
        self.logger = current_logger if current_logger else module_logger

    def get_update_want_version(self) -> str:
        return (
            self.app_settings.want_version or self.update_manager.WANT_VERSION
        )

    def get_base_path(self, path: str = "") -> Path:
        base = Path(self.app_settings.base_path)
        return base / path if path else base

    def get_lang(
        self, key: str, replacements: Optional[Mapping[str, Any]] = None
    ) -> str:
        return self.translator.get(f"installer.{key}", replacements)

    def get_console_hint(self, command: str) -> str:
        return f"* {self.app_settings.console_command} {command}"

    # --- Composer -------------------------------------------------------

    def setup_install_core(self) -> None:
        """
        Install the core packages with Composer.

        Composer output is streamed to the reporter. When Composer exits with
        a non-zero status the failure guidance is printed and the process
        exits with status 1.
        """
        composer = self.composer_factory(
            self.app_settings, current_logger=self.logger
        )
        composer.set_callback(self.reporter.write)

        self.composer_require_core(composer, self.want or None)

        if composer.last_exit_code() != 0:
            log_installer(
                f"{get_symbols(self.app_settings).get('critical', '🔥')} Core installation failed (exit code {composer.last_exit_code()}).",
                "critical",
                self.logger,
                self.app_settings,
            )
            self.output_failed_outro()
            sys.exit(1)

        self.reporter.line("")

    def composer_require_core(
        self, composer: ComposerProcess, want: Optional[str] = None
    ) -> int:
        version = want or self.get_update_want_version()
        self.reporter.comment(
            self.get_lang("installing_core_comment", {"version": version})
        )
        packages = [
            f"{package}:{version}" for package in self.app_settings.core_packages
        ]
        return composer.require(packages)

    # --- Project activation ----------------------------------------------

    def setup_set_project(self, license_key: str) -> None:
        """
        Activate the project for ``license_key`` and store the Composer credentials.

        Raises:
            ActivationError: If the license is unpaid or has expired.
            UpdateManagerError: If the gateway request fails.
        """
        result = self.update_manager.request_project_details(license_key)

        if not result.get("is_active", False):
            raise ActivationError(self.get_lang("license_expired_comment"))

        self.set_composer_auth(result.get("email"), result.get("project_id"))

    def set_composer_auth(
        self, email: Optional[str], project_key: Optional[str]
    ) -> None:
        """
        Write the repository credentials to auth.json and register the
        repository in composer.json.

        Raises:
            ComposerConfigError: If either file holds malformed JSON or
                cannot be written.
        """
        composer_host = self.get_composer_url(with_protocol=False)
        self._inject_composer_config(
            "auth.json",
            {
                "http-basic": {
                    composer_host: {
                        "username": email,
                        "password": project_key,
                    }
                }
            },
        )
        self._inject_composer_config(
            "composer.json",
            {
                "repositories": {
                    self.app_settings.composer_repository_name: {
                        "type": "composer",
                        "url": self.get_composer_url(),
                    }
                }
            },
        )
        log_installer(
            f"{get_symbols(self.app_settings).get('key', '🔑')} Stored Composer credentials for {composer_host}",
            "info",
            self.logger,
            self.app_settings,
        )

    def _inject_composer_config(
        self, file_name: str, data: Dict[str, Any]
    ) -> None:
        file_path = self.get_base_path(file_name)
        try:
            inject_json_to_file(file_path, data)
        except (OSError, ValueError) as e:
            log_installer(
                f"{get_symbols(self.app_settings).get('error', '❌')} Cannot update {file_path}: {e}",
                "error",
                self.logger,
                self.app_settings,
            )
            raise ComposerConfigError(
                f"Unable to update {file_path}: {e}"
            ) from e

    def get_composer_url(self, with_protocol: bool = True) -> str:
        return self.update_manager.get_composer_url(with_protocol)

    # --- Output -----------------------------------------------------------

    def output_intro(self) -> None:
        self.reporter.line(INTRO_BANNER)

    def output_outro(self) -> None:
        self.reporter.line(OUTRO_BANNER)

        self.reporter.comment(self.get_lang("migrate_database_comment"))
        self.reporter.line("")
        self.reporter.line(
            self.get_console_hint(self.app_settings.migrate_command)
        )
        self.reporter.line("")

        admin_url = (self.get_env_var("APP_URL") or "") + (
            self.get_env_var("BACKEND_URI") or ""
        )
        self.reporter.comment(self.get_lang("visit_backend_comment"))
        self.reporter.line("")
        self.reporter.line(f"* {admin_url}")

    def output_failed_outro(self) -> None:
        self.reporter.title(self.get_lang("install_failed_label"))
        self.reporter.error(self.get_lang("install_failed_comment"))
        self.reporter.line("")

        self.reporter.line(self.get_lang("open_configurator_comment"))
        self.reporter.line("")

        self.reporter.line("-- OR --")
        self.reporter.line("")

        self._output_follow_up_commands()

    def output_non_interactive(self) -> None:
        self.reporter.comment(self.get_lang("non_interactive_comment"))
        self.reporter.line("")
        self._output_follow_up_commands()

    def _output_follow_up_commands(self) -> None:
        self.reporter.line(
            self.get_console_hint(
                f"{self.app_settings.project_set_command} <LICENSE KEY>"
            )
        )
        self.reporter.line("")

        build_command = self.app_settings.build_command
        if self.want:
            build_command += f" --want={self.want}"
        self.reporter.line(self.get_console_hint(build_command))

    # --- Environment --------------------------------------------------------

    def check_env_writable(self) -> bool:
        """
        Make sure the application has a writable ``.env`` file.

        A missing ``.env`` is created from ``.env.example`` and loaded into the
        environment. Core paths are added to ``.gitignore`` when that file
        exists and is writable; otherwise it is left alone.

        Returns:
            bool: Whether ``.env`` is writable.
        """
        env_path = self.get_base_path(".env")
        gitignore = self.get_base_path(".gitignore")

        if not env_path.exists():
            if copy_env_template(
                self.get_base_path(".env.example"),
                env_path,
                self.app_settings,
                self.logger,
            ):
                self.refresh_env_vars()

        if gitignore.is_file() and is_writable(gitignore):
            added = add_paths_to_gitignore(
                gitignore,
                self.app_settings.gitignore_paths,
                self.app_settings,
                self.logger,
            )
            if added:
                self.reporter.comment(
                    self.get_lang(
                        "gitignore_updated_comment", {"paths": ", ".join(added)}
                    )
                )

        return is_writable(env_path)

    def refresh_env_vars(self) -> bool:
        return refresh_env_vars(self.get_base_path(".env"), self.logger)

    def get_env_var(
        self, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        return get_env_var(key, default)

    def set_env_var(self, key: str, value: str) -> None:
        set_env_var(self.get_base_path(".env"), key, value)

    def non_interactive_check(self, now: Optional[float] = None) -> bool:
        """
        Guess whether the command ran without anyone answering its prompts.

        A run that reaches this point within a second of starting cannot have
        waited for a person, so it is treated as non-interactive.
        """
        current = now if now is not None else self.clock()
        return (current - self.start_time) < NON_INTERACTIVE_THRESHOLD_SECONDS
