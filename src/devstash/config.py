"""Configuration management for DevStash.

Settings are resolved with the following precedence:

1. Command-line flag (``--webhook-url``, ``--auth-token``)
2. ``DEVSTASH_*`` environment variable
3. Config file at ``$XDG_CONFIG_HOME/devstash/config.toml``
4. Unset (empty string)
"""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from .errors import UsageError

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

VALID_KEYS = ("webhookUrl", "authToken")
ENV_PREFIX = "DEVSTASH_"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/devstash)."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / "devstash"


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def env_var_name(key: str) -> str:
    """Environment variable that can supply ``key`` (e.g. DEVSTASH_WEBHOOKURL)."""
    return f"{ENV_PREFIX}{key.upper()}"


def validate_key(key: str) -> None:
    if key not in VALID_KEYS:
        valid = ", ".join(f"'{k}'" for k in VALID_KEYS)
        raise UsageError(f"Invalid configuration key '{key}'. Valid keys are {valid}.")


def _toml_string(value: str) -> str:
    # JSON string escapes are valid TOML basic-string escapes, except DEL
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def _load_config_file(config_path: Path) -> dict[str, str]:
    """Load string settings from the config file.

    A missing file is the same as an empty one. A malformed file is
    reported as a warning and ignored.
    """
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}")
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
        return {}

    logger.debug(f"Loaded config file {config_path}")
    return {key: value for key, value in data.items() if isinstance(value, str)}


class DevstashSettings(BaseModel):
    """Resolved settings handed to the webhook dispatcher."""

    webhook_url: str = Field(default="", alias="webhookUrl")
    auth_token: str = Field(default="", alias="authToken")

    model_config = {"frozen": True, "populate_by_name": True}


class ConfigStore:
    """Reads and writes the DevStash settings file.

    The file is read once when the store is created; it is only written
    by ``set``, which rewrites the whole file.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, Optional[str]]] = None,
    ):
        """Initialize the store.

        Args:
            path: Config file location (default: XDG config path)
            environ: Environment mapping (default: os.environ)
            overrides: Values from command-line flags, keyed like the file
        """
        self.path = path or get_config_path()
        self.environ = os.environ if environ is None else environ
        self.overrides = {key: value for key, value in (overrides or {}).items() if value}
        self._file_values = _load_config_file(self.path)

    def get(self, key: str) -> str:
        """Resolve ``key``: flag > environment > file > empty string."""
        if key in self.overrides:
            return self.overrides[key]

        env_value = self.environ.get(env_var_name(key))
        if env_value:
            return env_value

        return self._file_values.get(key, "")

    def set(self, key: str, value: str) -> Path:
        """Persist ``key`` to the config file and return the path written.

        Raises:
            UsageError: If ``key`` is not a recognized setting
        """
        validate_key(key)

        values = dict(self._file_values)
        values[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self._to_toml_str(values), encoding="utf-8")
        self._file_values = values

        logger.debug(f"Wrote {key} to {self.path}")
        return self.path

    def settings(self) -> DevstashSettings:
        return DevstashSettings(
            webhook_url=self.get("webhookUrl"),
            auth_token=self.get("authToken"),
        )

    @staticmethod
    def _to_toml_str(values: Mapping[str, str]) -> str:
        lines = ["# DevStash CLI configuration", ""]
        for key in VALID_KEYS:
            if key in values:
                lines.append(f"{key} = {_toml_string(values[key])}")
        return "\n".join(lines) + "\n"
