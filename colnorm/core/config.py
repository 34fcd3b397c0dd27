"""
Configuration management for colnorm.

Loads settings from environment variables and YAML config files.
Uses pydantic for validation.

Priority order:
1. Environment variables
2. .env file
3. Field defaults
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from colnorm.core.constants import CONFIG_FILES, DEFAULT_METHOD
from colnorm.core.exceptions import ConfigurationError
from colnorm.core.types import NormalizationMethod


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Paths and log level are loaded from .env file or environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Paths
    config_dir: Path = Field(
        default=Path("config"),
        description="Directory containing YAML config files",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("config_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: str | Path) -> Path:
        """Convert string to Path and resolve."""
        return Path(v).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Ensure log level is uppercase."""
        return v.upper()


class NormalizationConfig:
    """Configuration for normalization loaded from normalization.yaml."""

    def __init__(self, config_path: Path):
        self._config = self._load_yaml(config_path)
        self._validate_methods()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NormalizationConfig":
        """Build a config from an already-parsed mapping."""
        config = cls.__new__(cls)
        config._config = data or {}
        config._validate_methods()
        return config

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """Load and parse YAML file."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        with open(path) as f:
            return yaml.safe_load(f) or {}

    def _validate_methods(self) -> None:
        """Reject method names that are not NormalizationMethod values."""
        names = {"default_method": self.default_method}
        for feature, config in self.features.items():
            names[feature] = config.get("method", self.default_method)

        valid = [m.value for m in NormalizationMethod]
        for where, method in names.items():
            if method not in valid:
                raise ConfigurationError(
                    f"Unknown normalization method {method!r} for {where}. "
                    f"Valid methods: {valid}"
                )

    @property
    def _section(self) -> dict[str, Any]:
        return self._config.get("normalization", {}) or {}

    @property
    def default_method(self) -> str:
        """Method for columns without an explicit entry."""
        return self._section.get("default_method", DEFAULT_METHOD)

    @property
    def warn_on_zero_scale(self) -> bool:
        """Whether to log a warning for constant columns."""
        return bool(self._section.get("warn_on_zero_scale", True))

    @property
    def features(self) -> dict[str, dict[str, Any]]:
        """Per-feature configuration."""
        return self._section.get("features", {}) or {}

    def get_feature_config(self, feature: str) -> dict[str, Any]:
        """Get configuration for a specific feature."""
        default = {"method": self.default_method}
        return self.features.get(feature, default)

    def get_method(self, feature: str) -> NormalizationMethod:
        """Get the normalization method for a feature."""
        method = self.get_feature_config(feature).get("method", self.default_method)
        return NormalizationMethod(method)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure logging for applications using colnorm.

    Installs a root handler (unless one exists) and sets the colnorm
    package logger to settings.log_level.

    Args:
        settings: Settings to read the level from (cached settings if omitted)
    """
    settings = settings or get_settings()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("colnorm").setLevel(settings.log_level)


def load_config(config_type: str) -> NormalizationConfig:
    """
    Load a specific configuration file.

    Args:
        config_type: Currently only "normalization"

    Returns:
        Appropriate config object
    """
    settings = get_settings()
    config_map = {
        "normalization": (settings.config_dir / CONFIG_FILES["normalization"], NormalizationConfig),
    }

    if config_type not in config_map:
        raise ConfigurationError(
            f"Unknown config type: {config_type}. "
            f"Valid types: {list(config_map.keys())}"
        )

    path, config_class = config_map[config_type]
    return config_class(path)
