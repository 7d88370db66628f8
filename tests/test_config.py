"""Tests for configuration resolution and persistence."""

from unittest.mock import patch

import pytest

from devstash.config import ConfigStore, env_var_name, get_config_dir, get_config_path
from devstash.errors import UsageError


def test_config_path_uses_xdg_config_home(isolated_env):
    """Test that the config file lives under XDG_CONFIG_HOME/devstash."""
    assert get_config_path() == isolated_env / "devstash" / "config.toml"


def test_config_dir_falls_back_to_home_at_call_time(tmp_path, monkeypatch):
    """Test that ~/.config is resolved when called, not at import."""
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    fake_home = tmp_path / "home"

    with patch("devstash.config.Path.home", return_value=fake_home) as mock_home:
        assert get_config_dir() == fake_home / ".config" / "devstash"

    mock_home.assert_called_once()


def test_xdg_config_home_skips_home_lookup(isolated_env):
    """Test that an unresolvable home does not matter when XDG_CONFIG_HOME is set."""
    with patch("devstash.config.Path.home", side_effect=RuntimeError("no home")):
        assert get_config_dir() == isolated_env / "devstash"


def test_env_var_names():
    """Test that env vars are the DEVSTASH_ prefix plus the upper-cased key."""
    assert env_var_name("webhookUrl") == "DEVSTASH_WEBHOOKURL"
    assert env_var_name("authToken") == "DEVSTASH_AUTHTOKEN"


def test_missing_file_means_unset(config_store, config_path):
    """Test that a missing config file resolves every key to empty."""
    assert not config_path.exists()
    assert config_store.get("webhookUrl") == ""
    assert config_store.get("authToken") == ""


def test_set_creates_directories_and_file(config_store, config_path):
    """Test that set creates missing parent directories and the file."""
    written = config_store.set("webhookUrl", "https://example.com/hook")

    assert written == config_path
    assert config_path.exists()
    assert ConfigStore(path=config_path, environ={}).get("webhookUrl") == "https://example.com/hook"


def test_set_carries_forward_existing_keys(config_store, config_path):
    """Test that setting one key keeps the other persisted key."""
    config_store.set("webhookUrl", "https://example.com/hook")
    config_store.set("authToken", "token-1")

    reloaded = ConfigStore(path=config_path, environ={})
    assert reloaded.get("webhookUrl") == "https://example.com/hook"
    assert reloaded.get("authToken") == "token-1"


def test_set_overwrites_existing_value(config_store, config_path):
    """Test that set replaces a previously stored value."""
    config_store.set("authToken", "old")
    config_store.set("authToken", "new")

    assert ConfigStore(path=config_path, environ={}).get("authToken") == "new"


def test_set_preserves_special_characters(config_store, config_path):
    """Test that quotes, backslashes, tabs and unicode survive a round trip."""
    value = 'quote " backslash \\ tab\t unicode é'
    config_store.set("authToken", value)

    assert ConfigStore(path=config_path, environ={}).get("authToken") == value


def test_set_rejects_unknown_key_without_writing(config_store, config_path):
    """Test that an unknown key raises UsageError and writes nothing."""
    with pytest.raises(UsageError, match="Invalid configuration key 'color'"):
        config_store.set("color", "blue")

    assert not config_path.exists()


def test_flag_beats_env_and_file(config_path):
    """Test that a flag override wins over env and file values."""
    ConfigStore(path=config_path, environ={}).set("webhookUrl", "https://file.example")

    store = ConfigStore(
        path=config_path,
        environ={"DEVSTASH_WEBHOOKURL": "https://env.example"},
        overrides={"webhookUrl": "https://flag.example"},
    )
    assert store.get("webhookUrl") == "https://flag.example"


def test_env_beats_file(config_path):
    """Test that an env var wins over the file value."""
    ConfigStore(path=config_path, environ={}).set("webhookUrl", "https://file.example")

    store = ConfigStore(path=config_path, environ={"DEVSTASH_WEBHOOKURL": "https://env.example"})
    assert store.get("webhookUrl") == "https://env.example"


def test_empty_override_and_env_fall_through(config_path):
    """Test that empty flag and env values count as unset."""
    ConfigStore(path=config_path, environ={}).set("authToken", "from-file")

    store = ConfigStore(
        path=config_path,
        environ={"DEVSTASH_AUTHTOKEN": ""},
        overrides={"authToken": None},
    )
    assert store.get("authToken") == "from-file"


def test_reads_os_environ_by_default(config_path, monkeypatch):
    """Test that the store reads os.environ when no mapping is given."""
    monkeypatch.setenv("DEVSTASH_AUTHTOKEN", "env-token")
    assert ConfigStore(path=config_path).get("authToken") == "env-token"


def test_malformed_file_is_ignored(config_path, caplog):
    """Test that an invalid TOML file is warned about and treated as empty."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text("webhookUrl = [not valid")

    store = ConfigStore(path=config_path, environ={})

    assert store.get("webhookUrl") == ""
    assert "Ignoring unreadable config file" in caplog.text


def test_non_string_values_are_ignored(config_path):
    """Test that non-string file values are skipped."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text('webhookUrl = 42\nauthToken = "abc"\n')

    store = ConfigStore(path=config_path, environ={})
    assert store.get("webhookUrl") == ""
    assert store.get("authToken") == "abc"


def test_settings_struct(config_path):
    """Test that settings() resolves both keys into one struct."""
    store = ConfigStore(
        path=config_path,
        environ={"DEVSTASH_AUTHTOKEN": "tok"},
        overrides={"webhookUrl": "https://flag.example"},
    )
    settings = store.settings()

    assert settings.webhook_url == "https://flag.example"
    assert settings.auth_token == "tok"


def test_set_does_not_change_resolved_override(config_path):
    """Test that persisting a value does not beat an active flag override."""
    store = ConfigStore(path=config_path, environ={}, overrides={"webhookUrl": "https://flag.example"})
    store.set("webhookUrl", "https://file.example")

    assert store.get("webhookUrl") == "https://flag.example"
