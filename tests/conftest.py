"""Shared test fixtures for envlayer."""

from __future__ import annotations

import logging

import pytest

from envlayer.logging_config import LEVEL_ENV_VAR, LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the global config at a temp directory and clear logging env."""
    config_dir = tmp_path / ".config" / "envlayer"
    monkeypatch.setattr("envlayer.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("envlayer.config.CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.delenv(LEVEL_ENV_VAR, raising=False)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the envlayer logger after tests that configure it."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def write_env(tmp_path):
    """Factory writing a .env file under tmp_path and returning its path."""
    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def layered_sources(write_env):
    """A general source and a more specific source that overrides it."""
    base = write_env(
        "base.env",
        "# shared defaults\n"
        "APP_NAME=envlayer\n"
        "APP_ENV=development\n"
        "DB_HOST = 127.0.0.1\n",
    )
    local = write_env(
        "local.env",
        "APP_ENV=production    # deployed\n"
        "DB_PASSWORD=\"s3cr3t#pass\"\n",
    )
    return [base, local]
