# installer/main_installer.py
# -*- coding: utf-8 -*-
"""
Main entry point for the CMS installer commands.
Handles argument parsing, logging setup, and dispatches to the
``install``, ``project:set`` and ``build`` commands.
"""

import argparse
import logging
import sys
import time
from typing import Callable, Dict, List, Optional

from common.command_utils import log_installer
from common.core_utils import setup_logging
from common.lang_loader import Translator
from installer.cli_handler import cli_prompt_for_value
from installer.config_loader import load_app_settings
from installer.config_models import AppSettings
from installer.exceptions import SetupError
from installer.output import ConsoleReporter, Reporter
from installer.setup_builder import SetupBuilder

logger = logging.getLogger(__name__)

APP_URL_DEFAULT = "http://localhost"


def build_setup_builder(
    app_settings: AppSettings,
    args: argparse.Namespace,
    start_time: float,
    reporter: Optional[Reporter] = None,
) -> SetupBuilder:
    return SetupBuilder(
        app_settings,
        reporter if reporter is not None else ConsoleReporter(),
        Translator(app_settings.locale, app_settings.fallback_locale),
        start_time=start_time,
        want=getattr(args, "want", None),
        current_logger=logger,
    )


def _report_env_not_writable(builder: SetupBuilder) -> int:
    builder.reporter.error(
        builder.get_lang(
            "env_not_writable_comment",
            {"path": builder.get_base_path(".env")},
        )
    )
    return 1


def run_install(builder: SetupBuilder, args: argparse.Namespace) -> int:
    builder.output_intro()

    if not builder.check_env_writable():
        return _report_env_not_writable(builder)

    license_key = ""
    if not args.no_interaction:
        app_url = cli_prompt_for_value(
            builder.get_lang("app_url_question"),
            builder.app_settings,
            default=builder.get_env_var("APP_URL") or APP_URL_DEFAULT,
            current_logger=logger,
        )
        builder.set_env_var("APP_URL", app_url)
        license_key = cli_prompt_for_value(
            builder.get_lang("license_key_question"),
            builder.app_settings,
            current_logger=logger,
        )

    if args.no_interaction or builder.non_interactive_check():
        builder.output_non_interactive()
        return 0

    if license_key:
        builder.setup_set_project(license_key)

    builder.setup_install_core()
    builder.output_outro()
    return 0


def run_project_set(builder: SetupBuilder, args: argparse.Namespace) -> int:
    builder.setup_set_project(args.license_key)
    builder.reporter.info(builder.get_lang("project_set_success"))
    return 0


def run_build(builder: SetupBuilder, args: argparse.Namespace) -> int:
    builder.output_intro()

    if not builder.check_env_writable():
        return _report_env_not_writable(builder)

    builder.setup_install_core()
    builder.output_outro()
    return 0


COMMANDS: Dict[str, Callable[[SetupBuilder, argparse.Namespace], int]] = {
    "install": run_install,
    "project:set": run_project_set,
    "build": run_build,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CMS Installer Script",
        epilog="Example: python3 ./install.py install --want=^3.0",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config-file",
        default="config.yaml",
        help="Path to YAML configuration file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    config_group = parser.add_argument_group(
        "Configuration Overrides (CLI > YAML > ENV > Defaults)"
    )
    config_group.add_argument(
        "--base-path", default=None, help="Application base path."
    )
    config_group.add_argument(
        "--composer-command", default=None, help="Composer executable."
    )
    config_group.add_argument(
        "--locale", default=None, help="Locale for installer messages."
    )
    config_group.add_argument(
        "--log-prefix", default=None, help="Prefix for log messages."
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    install_parser = subparsers.add_parser(
        "install", help="Set up the application and install its dependencies."
    )
    install_parser.add_argument(
        "--want", default=None, help="Version constraint for the core packages."
    )
    install_parser.add_argument(
        "--no-interaction",
        action="store_true",
        help="Do not ask any questions; print the follow-up commands instead.",
    )

    project_parser = subparsers.add_parser(
        "project:set", help="Activate the project with a license key."
    )
    project_parser.add_argument("license_key", metavar="LICENSE_KEY")

    build_parser_ = subparsers.add_parser(
        "build", help="Install the core packages with Composer."
    )
    build_parser_.add_argument(
        "--want", default=None, help="Version constraint for the core packages."
    )
    return parser


def main(
    cli_args_list: Optional[List[str]] = None,
    start_time: Optional[float] = None,
) -> int:
    if start_time is None:
        start_time = time.time()

    parser = build_parser()
    parsed_cli_args = parser.parse_args(cli_args_list)

    try:
        app_settings = load_app_settings(
            parsed_cli_args, parsed_cli_args.config_file, logger
        )
    except SystemExit as e:
        print(
            f"CRITICAL: Failed to load or validate application configuration: {e}",
            file=sys.stderr,
        )
        return 1

    setup_logging(
        log_level=logging.DEBUG if parsed_cli_args.verbose else logging.WARNING,
        log_to_console=True,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    builder = build_setup_builder(app_settings, parsed_cli_args, start_time)
    command = COMMANDS[parsed_cli_args.command]

    try:
        return command(builder, parsed_cli_args)
    except SetupError as e:
        log_installer(
            f"{app_settings.symbols.get('error', '❌')} {parsed_cli_args.command} failed: {e}",
            "error",
            logger,
            app_settings,
        )
        builder.reporter.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
