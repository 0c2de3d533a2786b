"""
Pytest configuration and shared fixtures for kimai_credentials tests.
"""
import logging
from pathlib import Path
from typing import Dict, Optional

import pytest

from kimai_credentials.errors import SecretLookupError
from kimai_credentials.secret_store import StaticSecretStore


# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


class FakeSecretStore(StaticSecretStore):
    """StaticSecretStore that can be told to fail every lookup."""

    def __init__(self, secrets: Optional[Dict[str, str]] = None, error: Optional[BaseException] = None):
        super().__init__(secrets)
        self.error = error

    def lookup(self, path: str) -> str:
        if self.error is None:
            return super().lookup(path)
        self.calls.append(path)
        raise SecretLookupError(path, self.error)


@pytest.fixture
def fake_store():
    """Fixture that provides an empty fake store."""
    return FakeSecretStore()


@pytest.fixture
def clean_env(monkeypatch):
    """
    Fixture that clears all KIMAI_* and XDG environment variables.
    Returns a function to set environment variables for testing.
    """
    env_vars_to_clear = [
        "KIMAI_CONFIG",
        "KIMAI_HOST",
        "KIMAI_TOKEN",
        "KIMAI_USER",
        "KIMAI_PASSWORD",
        "KIMAI_PASS_PATH",
        "XDG_CONFIG_HOME",
        "XDG_CONFIG_DIRS",
    ]

    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)

    def set_env(**kwargs):
        """Set environment variables for testing."""
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return set_env


@pytest.fixture
def write_config(tmp_path):
    """
    Fixture that writes a TOML config file and returns its path.
    Accepts the file content and an optional path relative to tmp_path.
    """
    def _write(content: str, relative: str = "config.toml") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
