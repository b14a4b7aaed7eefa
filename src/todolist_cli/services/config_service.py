"""Persistent user settings for todolist-cli.

ConfigService owns config.json under the platformdirs config directory. It
writes defaults on first run and offers dotted-key access
(``display.date_format``) for the ``config`` command.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from todolist_cli.models.config_models import AppConfig

APP_NAME = "todolist_cli"
DEFAULT_DATA_FILE = "todolist.json"

logger = logging.getLogger(__name__)


class ConfigService:
    """Reads, edits and writes the AppConfig document.

    Loaded lazily on first access; every change is written straight back.
    """

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))

        for directory in (self.config_dir, self.data_dir):
            directory.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """The loaded configuration (read from disk on first access)."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def data_file(self) -> Path:
        """Path of the default task store."""
        configured = self.config.storage.data_file
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / DEFAULT_DATA_FILE

    def load_config(self) -> AppConfig:
        """Read config.json, creating it with defaults when it is missing."""
        if self._config is not None:
            return self._config

        try:
            raw = self.config_path.read_text(encoding="utf-8")
            self._config = AppConfig.model_validate_json(raw)
        except FileNotFoundError:
            # Expected on first run
            logger.info("No config at %s, writing defaults", self.config_path)
            self._config = self.create_default_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Write the loaded configuration back to config.json."""
        if self._config is None:
            raise RuntimeError("Configuration has not been loaded")

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(
                self._config.model_dump_json(indent=4), encoding="utf-8"
            )
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create and persist a default configuration."""
        self._config = AppConfig()
        self._config.storage.data_file = str(self.data_dir / DEFAULT_DATA_FILE)
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Returns None for unknown keys.
        """
        value: Any = self.config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        The whole document is re-validated, so a bad value raises a
        pydantic ValidationError and leaves the configuration untouched.

        Raises:
            KeyError: If the key does not exist
        """
        if not self._is_known_key(key):
            raise KeyError(f"Unknown config key: {key}")

        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset the whole configuration, or a single key, to defaults."""
        if key is None:
            self.create_default_config()
            return

        default_config = AppConfig()
        default_config.storage.data_file = str(self.data_dir / DEFAULT_DATA_FILE)
        keys = key.split(".")
        value: Any = default_config
        for k in keys:
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(f"Unknown config key: {key}")
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            value = value.model_dump()
        elif isinstance(value, list):
            value = [v.model_dump() if isinstance(v, BaseModel) else v for v in value]
        self.set(key, value)

    def _is_known_key(self, key: str) -> bool:
        model: Any = AppConfig
        for k in key.split("."):
            fields = getattr(model, "model_fields", None)
            if not fields or k not in fields:
                return False
            model = fields[k].annotation
        return True


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Process-wide ConfigService."""
    return ConfigService()
