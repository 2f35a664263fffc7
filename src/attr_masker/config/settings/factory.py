"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence, TypeVar

from attr_masker.config.settings.base import Settings
from attr_masker.config.settings.loaders import SettingsLoader, construct, is_required
from attr_masker.config.validation.errors import MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Layer several settings sources into one instance.

    Usage::

        settings = SettingsFactory.create(
            MaskerSettings,
            loaders=[DotenvSettingsLoader()],
            overrides={"environment": "ci"},
        )
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        """Build *settings_cls* from *loaders* (later ones win), then *overrides*.

        A loader that lacks a required value is skipped so that a later
        source can still supply it.  An invalid value always propagates.

        Raises
        ------
        MissingRequiredSettingError
            A field without a default is still unset after every source.
        ConfigError
            Any value was rejected.
        """
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except MissingRequiredSettingError:
                continue
            values.update(dataclasses.asdict(loaded))
        values.update(overrides or {})

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name not in values and is_required(field):
                raise MissingRequiredSettingError(field.name)
        return construct(settings_cls, values)


__all__ = ["SettingsFactory"]
