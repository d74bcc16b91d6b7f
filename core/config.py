"""Configuration management for the 0x45 client."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    CONFIG_FILE_NAME,
    CONFIG_SUBDIR,
    CONFIG_SUBDIR_FILE_NAME,
    DEFAULT_API_URL,
    ENV_PREFIX,
)
from .exceptions import ConfigurationError, ValidationError
from .log import get_logger
from .types import ConfigKey
from .utils import max_expiry_days, parse_duration

logger = get_logger(__name__)

DEFAULTS: dict[str, str] = {ConfigKey.API_URL.value: DEFAULT_API_URL}


class Settings(BaseModel):
    """Resolved settings for a single invocation."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Service base URL")
    api_key: str | None = Field(default=None, description="Bearer API key")
    default_expiry: str | None = Field(
        default=None, description="Expiry used when --expires is not given"
    )
    log_level: str = Field(default="WARNING", description="Logging level")

    @property
    def has_api_key(self) -> bool:
        """Check whether an API key is configured."""
        return bool(self.api_key)

    @property
    def max_expiry_days(self) -> int:
        """Longest expiry allowed for the configured key state."""
        return max_expiry_days(self.has_api_key)


def default_config_path(home: Path | None = None) -> Path:
    """Locate the config file by convention.

    ``~/.0x45.yaml`` wins when it exists, then ``~/.config/0x45/config.yaml``.
    When neither exists the dot-file is used for future writes.
    """
    home = home or Path.home()
    dotfile = home / CONFIG_FILE_NAME
    subdir_file = home.joinpath(*CONFIG_SUBDIR, CONFIG_SUBDIR_FILE_NAME)

    if dotfile.exists():
        return dotfile
    if subdir_file.exists():
        return subdir_file
    return dotfile


def _read_config_file(path: Path) -> dict[str, str]:
    """Read the YAML config file, returning an empty mapping if it is missing."""
    if not path.exists():
        logger.debug(f"No config file at {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error reading config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping of keys to values"
        )

    values = {}
    for key, value in data.items():
        if value is None:
            continue
        # YAML resolves bare 0x45ff or 0123 to ints; never coerce those back
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Config file {path}: value for '{key}' must be a string; "
                f"quote it, e.g. {key}: \"{value}\""
            )
        values[str(key)] = value

    logger.info(f"Using config file: {path}")
    return values


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect OX45_* environment variables for the recognised keys."""
    overrides = {}
    for key in ConfigKey:
        value = environ.get(f"{ENV_PREFIX}{key.value.upper()}")
        if value:
            overrides[key.value] = value
    return overrides


def _check_key(key: str) -> str:
    """Normalise a config key and reject unknown ones."""
    try:
        return ConfigKey(key.strip().lower()).value
    except ValueError:
        allowed = ", ".join(k.value for k in ConfigKey)
        raise ValidationError(
            f"Unknown config key '{key}' (allowed: {allowed})"
        ) from None


class Configuration:
    """Layered configuration: flags, then environment, then file, then defaults.

    Only the file layer is ever written back; flags and environment variables
    are read-only overrides for the current process.
    """

    def __init__(
        self,
        path: Path,
        file_values: dict[str, str] | None = None,
        env_values: dict[str, str] | None = None,
        flag_values: dict[str, str] | None = None,
        log_level: str = "WARNING",
    ) -> None:
        self.path = path
        self._file_values = dict(file_values or {})
        self._env_values = dict(env_values or {})
        self._flag_values = dict(flag_values or {})
        self.log_level = log_level

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        api_key: str | None = None,
        api_url: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Configuration":
        """Build the configuration for this invocation.

        Args:
            path: Explicit config file path (``--config``)
            api_key: API key given on the command line (``--api-key``)
            api_url: Base URL given on the command line (``--api-url``)
            environ: Environment to read; defaults to ``os.environ`` plus ``.env``

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If the config file exists but cannot be parsed
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config_path = Path(path).expanduser() if path else default_config_path()

        flags = {}
        if api_key:
            flags[ConfigKey.API_KEY.value] = api_key
        if api_url:
            flags[ConfigKey.API_URL.value] = api_url

        return cls(
            path=config_path,
            file_values=_read_config_file(config_path),
            env_values=_env_overrides(environ),
            flag_values=flags,
            log_level=environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper(),
        )

    def get(self, key: str) -> str | None:
        """Get the resolved value for a key, or None when it is not set."""
        key = key.strip().lower()
        for layer in (self._flag_values, self._env_values, self._file_values):
            if layer.get(key):
                return layer[key]
        return DEFAULTS.get(key)

    def set(self, key: str, value: str) -> None:
        """Set a key in the config file and write the file.

        Raises:
            ValidationError: If the key is unknown or the value is invalid
            ConfigurationError: If the file cannot be written
        """
        key = _check_key(key)
        if key == ConfigKey.DEFAULT_EXPIRY.value:
            parse_duration(value)

        self._file_values[key] = value
        self.save()
        logger.info(f"Config value '{key}' set")

    def unset(self, key: str) -> bool:
        """Remove a key from the config file.

        Returns:
            False if the key was never set in the file, True otherwise
        """
        key = key.strip().lower()
        if key not in self._file_values:
            return False

        del self._file_values[key]
        self.save()
        logger.info(f"Config value '{key}' removed")
        return True

    def all_settings(self) -> dict[str, str]:
        """All currently resolved key/value pairs."""
        keys = {*DEFAULTS, *self._file_values, *self._env_values, *self._flag_values}
        resolved = {key: self.get(key) for key in sorted(keys)}
        return {key: value for key, value in resolved.items() if value is not None}

    def save(self) -> None:
        """Write the file layer back to disk, creating the directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self._file_values, f, default_flow_style=False)
        except OSError as e:
            logger.error(f"Could not write config file {self.path}: {e}")
            raise ConfigurationError(
                f"Could not write config file {self.path}: {e}"
            ) from e

    @property
    def settings(self) -> Settings:
        """Resolved settings as a typed model."""
        data: dict[str, Any] = {
            key.value: self.get(key.value)
            for key in ConfigKey
            if self.get(key.value) is not None
        }
        return Settings(log_level=self.log_level, **data)
