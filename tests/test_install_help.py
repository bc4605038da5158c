# tests/test_install_help.py
# -*- coding: utf-8 -*-
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
INSTALL_SCRIPT_PATH = PROJECT_ROOT / "install.py"


def test_install_script_help_output():
    """
    Tests the output of 'python install.py --help' to ensure it lists the
    installer commands and the configuration overrides.
    """
    if not INSTALL_SCRIPT_PATH.is_file():
        raise FileNotFoundError(
            f"install.py not found at {INSTALL_SCRIPT_PATH}"
        )

    result = subprocess.run(
        [sys.executable, str(INSTALL_SCRIPT_PATH), "--help"],
        capture_output=True,
        text=True,
        check=False,
        cwd=PROJECT_ROOT,
    )

    assert result.returncode == 0, result.stderr
    assert "CMS Installer Script" in result.stdout
    for command in ("install", "project:set", "build"):
        assert command in result.stdout, f"'{command}' missing from help."
    assert "--base-path" in result.stdout
    assert "--config-file" in result.stdout


def test_install_script_requires_command():
    result = subprocess.run(
        [sys.executable, str(INSTALL_SCRIPT_PATH)],
        capture_output=True,
        text=True,
        check=False,
        cwd=PROJECT_ROOT,
    )

    assert result.returncode == 2
    assert "COMMAND" in result.stderr
