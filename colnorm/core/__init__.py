"""Core module containing types, configuration, and shared utilities."""

from colnorm.core.types import ColumnStats, NormalizationMethod
from colnorm.core.config import NormalizationConfig, Settings, load_config, setup_logging
from colnorm.core.exceptions import (
    ColnormError,
    ConfigurationError,
    NormalizationError,
    ValidationError,
)

__all__ = [
    # Types
    "ColumnStats",
    "NormalizationMethod",
    # Config
    "Settings",
    "NormalizationConfig",
    "load_config",
    "setup_logging",
    # Exceptions
    "ColnormError",
    "ConfigurationError",
    "NormalizationError",
    "ValidationError",
]
