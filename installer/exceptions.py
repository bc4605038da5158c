# installer/exceptions.py
# -*- coding: utf-8 -*-
"""
Exceptions raised by the installer helpers and handled by the commands.
"""


class SetupError(Exception):
    """Base class for recoverable installer errors shown to the user."""


class ActivationError(SetupError):
    """The project license is inactive, unpaid or expired."""


class UpdateManagerError(SetupError):
    """The update gateway could not be reached or rejected the request."""


class ComposerConfigError(SetupError):
    """auth.json or composer.json could not be updated."""
