"""Config settings – 12-factor env-based configuration."""
from attr_masker.config.settings.base import MaskerSettings, Settings
from attr_masker.config.settings.factory import SettingsFactory
from attr_masker.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "MaskerSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
