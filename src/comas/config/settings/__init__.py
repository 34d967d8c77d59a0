"""Config settings – environment-based configuration."""
from comas.config.settings.base import Settings
from comas.config.settings.dispatcher import DispatcherSettings, SubmitPolicy
from comas.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["DispatcherSettings", "EnvSettingsLoader", "Settings", "SettingsLoader", "SubmitPolicy"]
