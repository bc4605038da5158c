from installer.cli_handler import cli_prompt_for_value


def test_prompt_returns_answer(mocker, app_settings):
    mock_input = mocker.patch("builtins.input", return_value="  https://site.test ")

    result = cli_prompt_for_value("Application URL", app_settings, "http://localhost")

    assert result == "https://site.test"
    mock_input.assert_called_once_with(
        "   ℹ️ Application URL [http://localhost]: "
    )


def test_prompt_empty_answer_uses_default(mocker, app_settings):
    mocker.patch("builtins.input", return_value="")

    assert cli_prompt_for_value("License Key", app_settings, "none") == "none"


def test_prompt_eof_uses_default(mocker, app_settings, mock_logger):
    mocker.patch("builtins.input", side_effect=EOFError)

    result = cli_prompt_for_value(
        "License Key", app_settings, current_logger=mock_logger
    )

    assert result == ""
    mock_logger.warning.assert_called_once_with(
        "! No user input (EOF), using default for prompt: 'License Key'",
        exc_info=False,
    )
