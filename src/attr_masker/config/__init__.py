"""Config – 12-factor settings and loaders."""

from attr_masker.config.settings import EnvSettingsLoader, MaskerSettings, Settings, SettingsLoader
from attr_masker.config.validation import ConfigError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "MaskerSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
