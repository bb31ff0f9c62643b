"""Config – settings dataclass, env loaders and validation errors."""
from starflight.config.errors import (
    ENV_PREFIX,
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    env_var_for,
)
from starflight.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from starflight.config.settings import DEFAULT_ACKNOWLEDGEMENT_CAPACITY, DEFAULT_PUSH_URL, StarflightSettings

__all__ = [
    "ConfigError",
    "DEFAULT_ACKNOWLEDGEMENT_CAPACITY",
    "DEFAULT_PUSH_URL",
    "DotenvSettingsLoader",
    "ENV_PREFIX",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SettingsLoader",
    "StarflightSettings",
    "env_var_for",
]
