"""Pytest fixtures for DevStash tests."""

import pytest

from devstash.config import ConfigStore, DevstashSettings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the config dir at a temp folder and clear DevStash env vars.

    Keeps tests from reading or writing the real ~/.config/devstash.
    """
    config_home = tmp_path / "xdg_config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in ("DEVSTASH_WEBHOOKURL", "DEVSTASH_AUTHTOKEN", "EDITOR"):
        monkeypatch.delenv(name, raising=False)
    # Local stub servers must not be routed through a proxy
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    return config_home


@pytest.fixture
def config_path(isolated_env):
    """Path of the config file the CLI will use."""
    return isolated_env / "devstash" / "config.toml"


@pytest.fixture
def config_store(config_path):
    """ConfigStore backed by the temp config file and an empty environment."""
    return ConfigStore(path=config_path, environ={})


@pytest.fixture
def settings():
    """Settings with a webhook URL and token configured."""
    return DevstashSettings(webhook_url="http://hooks.test/devstash", auth_token="secret-token")
