# tests/conftest.py
import io
import logging
from unittest.mock import MagicMock

import pytest

from common.lang_loader import Translator
from installer.config_models import AppSettings
from installer.output import ConsoleReporter
from installer.setup_builder import SetupBuilder
from installer.update_manager import UpdateManager


@pytest.fixture
def app_settings(tmp_path):
    """AppSettings rooted at a temporary application directory."""
    return AppSettings(
        base_path=tmp_path,
        composer_command="composer",
        console_command="php artisan",
        gateway_url="https://gateway.example.test/api",
        composer_url="https://gateway.example.test",
        symbols={"warning": "!", "gear": "⚙️", "error": "❌", "info": "ℹ️"},
    )


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def output_stream():
    return io.StringIO()


@pytest.fixture
def reporter(output_stream):
    return ConsoleReporter(output_stream, decorated=False)


@pytest.fixture
def translator():
    return Translator("en")


@pytest.fixture
def mock_update_manager(app_settings):
    manager = MagicMock(spec=UpdateManager)
    manager.WANT_VERSION = UpdateManager.WANT_VERSION
    real_manager = UpdateManager(app_settings, session=MagicMock())
    manager.get_composer_url.side_effect = real_manager.get_composer_url
    return manager


@pytest.fixture
def make_builder(app_settings, reporter, translator, mock_update_manager):
    """Factory building a SetupBuilder with test doubles; keyword args override."""

    def _make(**overrides):
        kwargs = dict(
            update_manager=mock_update_manager,
            start_time=1000.0,
            clock=lambda: 1000.0,
        )
        kwargs.update(overrides)
        return SetupBuilder(app_settings, reporter, translator, **kwargs)

    return _make
