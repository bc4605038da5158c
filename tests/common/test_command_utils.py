import logging
import sys
from unittest.mock import MagicMock

import pytest

from common.command_utils import (
    COMMAND_NOT_FOUND_EXIT_CODE,
    command_exists,
    get_symbols,
    log_installer,
    stream_command,
)
from installer.config_models import SYMBOLS_DEFAULT


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
    ],
)
def test_log_installer_dispatches_by_level(mock_logger, level, method):
    log_installer("hello", level, mock_logger)
    getattr(mock_logger, method).assert_called_once_with(
        "hello", exc_info=False
    )


def test_log_installer_uses_module_logger(mocker):
    module_logger = mocker.patch("common.command_utils.module_logger")
    log_installer("fallback", "warning", exc_info=True)
    module_logger.warning.assert_called_once_with("fallback", exc_info=True)


def test_get_symbols(app_settings):
    assert get_symbols(app_settings) is app_settings.symbols
    assert get_symbols(None) is SYMBOLS_DEFAULT


def test_command_exists(mocker):
    which = mocker.patch(
        "common.command_utils.shutil.which", return_value="/usr/bin/composer"
    )
    assert command_exists("composer") is True
    which.assert_called_once_with("composer")

    which.return_value = None
    assert command_exists("composer") is False


def test_stream_command_passes_output_to_callback(app_settings, mocker):
    mock_popen = mocker.patch("common.command_utils.subprocess.Popen")
    process = mock_popen.return_value.__enter__.return_value
    process.stdout = ["Loading composer repositories\n", "Done\n"]
    process.wait.return_value = 0
    received = []

    result = stream_command(
        ["composer", "install"],
        app_settings,
        output_callback=received.append,
        cwd="/srv/app",
    )

    assert result == 0
    assert received == ["Loading composer repositories\n", "Done\n"]
    assert mock_popen.call_args.args[0] == ["composer", "install"]
    assert mock_popen.call_args.kwargs["cwd"] == "/srv/app"


def test_stream_command_returns_failure_code(app_settings, mock_logger, mocker):
    mock_popen = mocker.patch("common.command_utils.subprocess.Popen")
    process = mock_popen.return_value.__enter__.return_value
    process.stdout = []
    process.wait.return_value = 2

    result = stream_command(
        ["composer", "require", "missing/package"],
        app_settings,
        current_logger=mock_logger,
    )

    assert result == 2
    mock_logger.error.assert_called_with(
        "❌ Command `composer require missing/package` failed (rc 2).",
        exc_info=False,
    )


def test_stream_command_missing_executable(app_settings, mock_logger, mocker):
    error = FileNotFoundError(2, "No such file", "composer")
    error.filename = "composer"
    mocker.patch("common.command_utils.subprocess.Popen", side_effect=error)

    result = stream_command(
        ["composer", "install"], app_settings, current_logger=mock_logger
    )

    assert result == COMMAND_NOT_FOUND_EXIT_CODE
    mock_logger.error.assert_called_once_with(
        "❌ Command not found: composer. Ensure it's installed and in PATH.",
        exc_info=False,
    )


def test_stream_command_real_process(app_settings):
    received = []

    result = stream_command(
        [sys.executable, "-c", "import sys; print('out'); sys.exit(3)"],
        app_settings,
        output_callback=received.append,
        current_logger=logging.getLogger("test_stream"),
    )

    assert result == 3
    assert received == ["out\n"]
