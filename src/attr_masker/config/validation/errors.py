"""Config validation errors – raised while reading ``ATTR_MASKER_*`` settings."""
from __future__ import annotations

from attr_masker.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be read or do not make sense.

    ``perform`` exits with status 1 on any ``ConfigError``, before a
    database connection is opened.
    """

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default was not provided by any source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used.

    The rejected value is kept on the instance only; the message and
    ``detail`` carry the setting name and the reason.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' is invalid: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
