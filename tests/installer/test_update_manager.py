from unittest.mock import MagicMock

import pytest
import requests

from installer.exceptions import UpdateManagerError
from installer.update_manager import UpdateManager


def _response(status_code=200, json_data=None, json_error=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def manager(app_settings, session):
    return UpdateManager(app_settings, session=session)


def test_request_project_details_posts_key(manager, session):
    session.post.return_value = _response(
        json_data={"is_active": True, "email": "dev@example.test"}
    )

    result = manager.request_project_details("LICENSE-KEY")

    assert result == {"is_active": True, "email": "dev@example.test"}
    session.post.assert_called_once_with(
        "https://gateway.example.test/api/project/detail",
        data={"id": "LICENSE-KEY"},
        timeout=30,
    )


def test_request_server_data_error_message_from_gateway(manager, session):
    session.post.return_value = _response(
        status_code=404, json_data={"error": "Project not found"}
    )

    with pytest.raises(UpdateManagerError, match="Project not found"):
        manager.request_server_data("project/detail", {"id": "nope"})


def test_request_server_data_error_without_body(manager, session):
    session.post.return_value = _response(
        status_code=500, json_error=ValueError("no json")
    )

    with pytest.raises(UpdateManagerError, match="HTTP 500"):
        manager.request_server_data("project/detail")


def test_request_server_data_invalid_json(manager, session):
    session.post.return_value = _response(json_error=ValueError("no json"))

    with pytest.raises(UpdateManagerError, match="Invalid response"):
        manager.request_server_data("project/detail")


def test_request_server_data_non_object_reply(manager, session):
    session.post.return_value = _response(json_data=["not", "an", "object"])

    with pytest.raises(UpdateManagerError, match="Invalid response"):
        manager.request_server_data("project/detail")


def test_request_server_data_connection_error(manager, session):
    session.post.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(UpdateManagerError, match="Could not contact") as exc_info:
        manager.request_server_data("project/detail")

    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)


def test_get_composer_url(manager):
    assert manager.get_composer_url() == "https://gateway.example.test"
    assert manager.get_composer_url(with_protocol=False) == "gateway.example.test"


def test_want_version_constant():
    assert UpdateManager.WANT_VERSION == "^3.0"
