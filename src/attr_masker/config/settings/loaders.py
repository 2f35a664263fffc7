"""Settings loaders – process environment and ``.env`` files."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Callable, TypeVar

from dotenv import load_dotenv

from attr_masker.config.settings.base import Settings
from attr_masker.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _split(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


_COERCERS: dict[str, Callable[[str], Any]] = {
    "bool": lambda raw: raw.strip().lower() in _TRUTHY,
    "int": int,
    "float": float,
    "list": _split,
}


def _coercer(type_hint: Any) -> Callable[[str], Any] | None:
    # String annotations come from modules using postponed evaluation.
    if isinstance(type_hint, str):
        name = type_hint.split("[", 1)[0]
    elif typing.get_origin(type_hint) is list:
        name = "list"
    else:
        name = getattr(type_hint, "__name__", "")
    return _COERCERS.get(name)


def env_key(settings_class: type[Settings], field_name: str) -> str:
    """``MaskerSettings`` + ``log_level`` -> ``ATTR_MASKER_LOG_LEVEL``."""
    prefix = settings_class._prefix
    return f"{prefix}_{field_name}".upper() if prefix else field_name.upper()


def is_required(field: dataclasses.Field[Any]) -> bool:
    return field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING


def construct(settings_class: type[T], values: dict[str, Any]) -> T:
    """Instantiate *settings_class*; anything but a :class:`ConfigError` is wrapped."""
    try:
        return settings_class(**values)
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}", cause=exc) from exc


class SettingsLoader(abc.ABC):
    """Port: build a settings instance from one source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read each field from ``<PREFIX>_<FIELD>`` in ``os.environ``.

    Booleans accept ``1/true/yes/on``; lists are comma separated.
    """

    def load(self, settings_class: type[T]) -> T:
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = env_key(settings_class, field.name)
            raw = os.environ.get(key)
            if raw is None:
                if is_required(field):
                    raise MissingRequiredSettingError(key)
                continue
            values[field.name] = self._coerce(key, raw, field.type)
        return construct(settings_class, values)

    @staticmethod
    def _coerce(key: str, raw: str, type_hint: Any) -> Any:
        coerce = _coercer(type_hint)
        if coerce is None:
            return raw
        try:
            return coerce(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(key, raw, str(exc)) from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load ``env_file`` into the environment, then read it like :class:`EnvSettingsLoader`.

    Variables already set in the process win unless ``override`` is true.
    A missing file is not an error.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SettingsLoader",
    "construct",
    "env_key",
    "is_required",
]
