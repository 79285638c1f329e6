"""Configuration management for Station Ranker."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config, validate_config_file
from .models import (
    AdvancedConfig,
    AppConfig,
    DisplayConfig,
    LocationConfig,
    LocationType,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RankingConfig,
    SourceConfig,
    SourceType,
)

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "SourceConfig",
    "LocationConfig",
    "RankingConfig",
    "DisplayConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "SourceType",
    "LocationType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
