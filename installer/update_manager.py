# installer/update_manager.py
# -*- coding: utf-8 -*-
"""
Client for the update and license gateway.

The gateway answers form-encoded POST requests with JSON documents. Project
activation uses the ``project/detail`` endpoint, whose reply carries the
``is_active`` flag together with the credentials for the private Composer
repository.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from common.command_utils import get_symbols, log_installer

from .config_models import WANT_VERSION_DEFAULT, AppSettings
from .exceptions import UpdateManagerError

module_logger = logging.getLogger(__name__)


class UpdateManager:
    """Talks to the update gateway on behalf of the installer commands."""

    WANT_VERSION = WANT_VERSION_DEFAULT

    def __init__(
        self,
        app_settings: AppSettings,
        session: Optional[requests.Session] = None,
        current_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.session = session if session is not None else requests.Session()
        self.logger = current_logger if current_logger else module_logger

    def request_project_details(self, project_key: str) -> Dict[str, Any]:
        """
        Look up a project by its license key.

        Args:
            project_key: The license key entered by the user.

        Returns:
            The decoded gateway reply, e.g. ``{"is_active": true, "email": ...,
            "project_id": ...}``.

        Raises:
            UpdateManagerError: If the gateway cannot be reached or rejects the key.
        """
        return self.request_server_data("project/detail", {"id": project_key})

    def request_server_data(
        self, uri: str, data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        POST ``data`` to ``<gateway_url>/<uri>`` and return the decoded JSON reply.

        Raises:
            UpdateManagerError: On network failure, a non-200 status, or a reply
                that is not a JSON object.
        """
        url = f"{self.app_settings.gateway_url.rstrip('/')}/{uri.lstrip('/')}"
        symbols = get_symbols(self.app_settings)
        log_installer(
            f"{symbols.get('gear', '⚙️')} Requesting {url}",
            "debug",
            self.logger,
            self.app_settings,
        )

        try:
            response = self.session.post(
                url, data=data or {}, timeout=self.app_settings.request_timeout
            )
        except requests.exceptions.RequestException as req_err:
            log_installer(
                f"{symbols.get('error', '❌')} Could not contact the update gateway: {req_err}",
                "error",
                self.logger,
                self.app_settings,
            )
            raise UpdateManagerError(
                f"Could not contact the update gateway at {url}: {req_err}"
            ) from req_err

        try:
            result = response.json()
        except ValueError as json_err:
            result = None
            if response.status_code == 200:
                raise UpdateManagerError(
                    f"Invalid response from the update gateway at {url}"
                ) from json_err

        if response.status_code != 200:
            message = None
            if isinstance(result, dict):
                message = result.get("error") or result.get("message")
            log_installer(
                f"{symbols.get('error', '❌')} Gateway returned HTTP {response.status_code} for {url}",
                "error",
                self.logger,
                self.app_settings,
            )
            raise UpdateManagerError(
                message
                or f"The update gateway returned HTTP {response.status_code}"
            )

        if not isinstance(result, dict):
            raise UpdateManagerError(
                f"Invalid response from the update gateway at {url}"
            )
        return result

    def get_composer_url(self, with_protocol: bool = True) -> str:
        """Return the Composer repository URL, or only its host name."""
        url = self.app_settings.composer_url.rstrip("/")
        if with_protocol:
            return url
        return urlparse(url).netloc or url
