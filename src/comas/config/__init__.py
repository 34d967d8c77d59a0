"""Config – dispatcher settings, loaders, and validation errors."""

from comas.config.settings import (
    DispatcherSettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    SubmitPolicy,
)
from comas.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DispatcherSettings",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "SubmitPolicy",
]
