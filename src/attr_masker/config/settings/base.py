"""Config settings – Settings base class and MaskerSettings."""
from __future__ import annotations

import dataclasses
import logging

from attr_masker.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class MaskerSettings(Settings):
    """Settings read by the bulk masking entry point.

    ``models`` is an import path of the form ``package.module:Base`` naming
    the SQLAlchemy declarative base whose mapped classes get masked.
    """

    _prefix: dataclasses.ClassVar[str] = "ATTR_MASKER"

    environment: str = "development"
    production_environments: list[str] = dataclasses.field(
        default_factory=lambda: ["production"]
    )
    database_url: str = ""
    models: str = ""
    log_level: str = "INFO"
    log_json: bool = False

    def _validate(self) -> None:
        if not self.environment:
            raise InvalidSettingValueError("environment", self.environment, "must not be empty")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")

    @property
    def is_production(self) -> bool:
        names = {name.lower() for name in self.production_environments}
        return self.environment.lower() in names

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["MaskerSettings", "Settings"]
