"""Configuration service for todovault.

Settings live in one config.json under the platform config directory. A
missing file is replaced by the defaults; a corrupt one is an error rather
than being silently overwritten. Individual settings are addressed by dotted
keys such as ``storage.strict_ownership``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from todovault.models.config_models import AppConfig


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self, config_dir: str | Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json (default: user config dir)
        """
        self.config_dir = Path(config_dir or user_config_dir("todovault"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Write config.json atomically, readable by the owner only.

        The file holds the admin password.
        """
        tmp_path = self.config_path.with_suffix(".json.tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(self.config.model_dump_json(indent=2))
        os.replace(tmp_path, self.config_path)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        The whole config is re-validated, so ``"true"``/``"false"`` strings
        become booleans where a boolean is expected.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the value does not validate
        """
        self.get(key)

        data = self.config.model_dump()
        *parents, leaf = key.split(".")
        target = data
        for part in parents:
            target = target[part]
        target[leaf] = value

        try:
            self._config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value}") from e
        self.save_config()

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
