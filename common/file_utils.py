# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions for the application's ``.env`` and
``.gitignore`` files.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from dotenv import load_dotenv, set_key

from installer.config_models import AppSettings

from .command_utils import get_symbols, log_installer

module_logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_writable(path: PathLike) -> bool:
    """Return True if ``path`` exists and the current user may write to it."""
    return os.access(path, os.W_OK)


def copy_env_template(
    template_path: PathLike,
    env_path: PathLike,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Copy the environment template (usually ``.env.example``) to ``env_path``.

    Parameters:
        template_path (PathLike): The template to copy from.
        env_path (PathLike): The environment file to create.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        current_logger (Optional[logging.Logger]): Logger instance to use.

    Returns:
        bool: True if the file was copied. False if the template is missing or
            the copy failed; neither case raises.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    template = Path(template_path)

    if not template.is_file():
        log_installer(
            f"{symbols.get('warning', '⚠️')} Environment template {template} not found. Skipping copy.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    try:
        shutil.copyfile(template, env_path)
    except OSError as e:
        log_installer(
            f"{symbols.get('error', '❌')} Failed to copy {template} to {env_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False

    log_installer(
        f"{symbols.get('success', '✅')} Created {env_path} from {template}",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def refresh_env_vars(
    env_path: PathLike,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Reload the variables defined in ``env_path`` into ``os.environ``.

    Variables already present in the real process environment keep their
    values, matching how the application itself reads its configuration.

    Returns:
        bool: True if at least one variable was read from the file.
    """
    logger_to_use = current_logger if current_logger else module_logger
    loaded = load_dotenv(dotenv_path=env_path, override=False)
    logger_to_use.debug(f"Reloaded environment from {env_path}: {loaded}")
    return loaded


def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def set_env_var(env_path: PathLike, key: str, value: str) -> None:
    """Write ``key=value`` to the environment file and the running process."""
    set_key(str(env_path), key, value, quote_mode="auto")
    os.environ[key] = value


def add_paths_to_gitignore(
    gitignore_path: PathLike,
    paths: Iterable[str],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Append each of ``paths`` to a ``.gitignore`` file unless it is already listed.

    Parameters:
        gitignore_path (PathLike): The .gitignore file to update. It must exist.
        paths (Iterable[str]): Entries to ensure are present, one per line.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        current_logger (Optional[logging.Logger]): Logger instance to use.

    Returns:
        List[str]: The entries that were appended, in order. Empty when the
            file already lists all of them, or when it could not be read or
            written; neither case raises.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    gitignore = Path(gitignore_path)

    try:
        contents = gitignore.read_text(encoding="utf-8")
        existing = {line.strip() for line in contents.splitlines()}

        to_add: List[str] = []
        for entry in paths:
            if entry not in existing and entry not in to_add:
                to_add.append(entry)

        if not to_add:
            return []

        new_contents = contents.rstrip("\n")
        if new_contents:
            new_contents += "\n"
        new_contents += "\n".join(to_add) + "\n"
        gitignore.write_text(new_contents, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log_installer(
            f"{symbols.get('warning', '⚠️')} Could not update {gitignore}: {e}. Leaving it unchanged.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return []

    log_installer(
        f"{symbols.get('success', '✅')} Added {', '.join(to_add)} to {gitignore}",
        "success",
        logger_to_use,
        app_settings,
    )
    return to_add
