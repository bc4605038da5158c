# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the CMS installer,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
COMPOSER_COMMAND_DEFAULT: str = "composer"
CORE_PACKAGES_DEFAULT: List[str] = ["october/all", "october/rain"]
WANT_VERSION_DEFAULT: str = "^3.0"
GATEWAY_URL_DEFAULT: str = "https://gateway.octobercms.com/api"
COMPOSER_URL_DEFAULT: str = "https://gateway.octobercms.com"
COMPOSER_REPOSITORY_NAME_DEFAULT: str = "octobercms"
REQUEST_TIMEOUT_DEFAULT: int = 30
CONSOLE_COMMAND_DEFAULT: str = "php artisan"
MIGRATE_COMMAND_DEFAULT: str = "october:migrate"
BUILD_COMMAND_DEFAULT: str = "october:build"
PROJECT_SET_COMMAND_DEFAULT: str = "project:set"
GITIGNORE_PATHS_DEFAULT: List[str] = ["/modules"]
LOCALE_DEFAULT: str = "en"
LOG_PREFIX_DEFAULT: str = "[CMS-SETUP]"

# Elapsed seconds since process start below which a run is treated as unattended.
NON_INTERACTIVE_THRESHOLD_SECONDS: float = 1.0

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
    "key": "🔑",
}


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_prefix="CMS_SETUP_", extra="ignore")

    base_path: Path = Field(
        default_factory=Path.cwd,
        description="Base path of the CMS application being installed.",
    )
    composer_command: str = Field(
        default=COMPOSER_COMMAND_DEFAULT,
        description="Composer executable used to install packages.",
    )
    core_packages: List[str] = Field(
        default_factory=lambda: list(CORE_PACKAGES_DEFAULT),
        description="Core packages required during installation.",
    )
    want_version: str = Field(
        default=WANT_VERSION_DEFAULT,
        description="Default version constraint for the core packages.",
    )
    gateway_url: str = Field(
        default=GATEWAY_URL_DEFAULT,
        description="Base URL of the update and license gateway.",
    )
    composer_url: str = Field(
        default=COMPOSER_URL_DEFAULT,
        description="URL of the private Composer repository.",
    )
    composer_repository_name: str = Field(
        default=COMPOSER_REPOSITORY_NAME_DEFAULT,
        description="Repository key written to composer.json.",
    )
    request_timeout: int = Field(
        default=REQUEST_TIMEOUT_DEFAULT,
        description="Timeout in seconds for gateway requests.",
    )
    console_command: str = Field(
        default=CONSOLE_COMMAND_DEFAULT,
        description="Console tool shown in follow-up command hints.",
    )
    migrate_command: str = Field(default=MIGRATE_COMMAND_DEFAULT)
    build_command: str = Field(default=BUILD_COMMAND_DEFAULT)
    project_set_command: str = Field(default=PROJECT_SET_COMMAND_DEFAULT)
    gitignore_paths: List[str] = Field(
        default_factory=lambda: list(GITIGNORE_PATHS_DEFAULT),
        description="Paths appended to .gitignore when it is writable.",
    )
    locale: str = Field(default=LOCALE_DEFAULT, description="Message locale.")
    fallback_locale: str = Field(
        default=LOCALE_DEFAULT,
        description="Locale used when a message is missing.",
    )
    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the installer.",
    )

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )
