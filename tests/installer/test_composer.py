import os

import pytest

from common.command_utils import COMMAND_NOT_FOUND_EXIT_CODE
from installer.composer import ComposerProcess


@pytest.fixture(autouse=True)
def composer_on_path(mocker):
    return mocker.patch("installer.composer.command_exists", return_value=True)


def test_require_runs_composer_in_base_path(app_settings, mocker):
    stream_command = mocker.patch(
        "installer.composer.stream_command", return_value=0
    )
    composer = ComposerProcess(app_settings)
    callback = mocker.MagicMock()
    composer.set_callback(callback)

    result = composer.require(["october/all:^3.0", "october/rain:^3.0"])

    assert result == 0
    assert composer.last_exit_code() == 0
    command = stream_command.call_args.args[0]
    assert command == [
        "composer",
        "require",
        "october/all:^3.0",
        "october/rain:^3.0",
        "--no-interaction",
    ]
    kwargs = stream_command.call_args.kwargs
    assert kwargs["output_callback"] is callback
    assert kwargs["cwd"] == str(app_settings.base_path)


def test_last_exit_code_tracks_failure(app_settings, mocker):
    mocker.patch("installer.composer.stream_command", return_value=1)
    composer = ComposerProcess(app_settings)

    assert composer.last_exit_code() is None
    composer.run(["install"])
    assert composer.last_exit_code() == 1


def test_require_passes_extra_args(app_settings, mocker):
    stream_command = mocker.patch(
        "installer.composer.stream_command", return_value=0
    )
    ComposerProcess(app_settings).require(
        ["october/all:^3.0"], extra_args=["--update-with-dependencies"]
    )

    assert stream_command.call_args.args[0][-1] == "--update-with-dependencies"


def test_environment_sets_composer_home_without_home(app_settings, mocker):
    mocker.patch.dict(os.environ, clear=True)
    composer = ComposerProcess(app_settings)

    env = composer.get_environment()

    assert env["COMPOSER_HOME"] == str(
        app_settings.base_path / "storage" / "composer"
    )


def test_environment_keeps_home(app_settings, mocker):
    mocker.patch.dict(os.environ, {"HOME": "/home/dev"}, clear=True)

    env = ComposerProcess(app_settings).get_environment()

    assert "COMPOSER_HOME" not in env
    assert env["HOME"] == "/home/dev"


def test_run_without_composer_on_path(
    app_settings, mocker, mock_logger, composer_on_path
):
    composer_on_path.return_value = False
    stream_command = mocker.patch("installer.composer.stream_command")
    composer = ComposerProcess(app_settings, current_logger=mock_logger)

    result = composer.require(["october/all:^3.0"])

    assert result == COMMAND_NOT_FOUND_EXIT_CODE
    assert composer.last_exit_code() == COMMAND_NOT_FOUND_EXIT_CODE
    composer_on_path.assert_called_once_with("composer")
    stream_command.assert_not_called()
    assert "was not found in PATH" in mock_logger.error.call_args.args[0]


def test_run_with_explicit_path_skips_lookup(
    app_settings, mocker, composer_on_path
):
    app_settings.composer_command = "/opt/composer/composer.phar"
    stream_command = mocker.patch(
        "installer.composer.stream_command", return_value=0
    )

    ComposerProcess(app_settings).run(["--version"])

    composer_on_path.assert_not_called()
    assert stream_command.call_args.args[0] == [
        "/opt/composer/composer.phar",
        "--version",
    ]
