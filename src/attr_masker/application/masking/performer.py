"""Bulk masking entry point.

Reads :class:`MaskerSettings` from the environment (and ``.env``), opens the
configured database and masks every record of every model mapped under the
configured declarative base::

    ATTR_MASKER_ENVIRONMENT=staging \\
    ATTR_MASKER_DATABASE_URL=postgresql+psycopg://... \\
    ATTR_MASKER_MODELS=myapp.models:Base \\
    attr-masker
"""
from __future__ import annotations

import contextlib
import importlib
import sys
from typing import Any, Iterator

from attr_masker.adapters.sqlalchemy import SqlAlchemySessionFactory, discover_repositories
from attr_masker.application.masking.runner import BulkMaskingRunner
from attr_masker.config.settings import DotenvSettingsLoader, MaskerSettings, SettingsFactory
from attr_masker.config.validation import ConfigError
from attr_masker.kernel.errors import EnvironmentGuardRejectedError, PersistenceUnavailableError
from attr_masker.kernel.persistence import MaskingRepository
from attr_masker.observability.logging import LoggerFactory, get_logger

__all__ = ["main", "perform"]

_log = get_logger(__name__)


def _import_base(path: str) -> Any:
    module_name, _, attribute = path.partition(":")
    if not attribute:
        raise PersistenceUnavailableError(path, f"Models path '{path}' must look like 'package.module:Base'")
    try:
        return getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise PersistenceUnavailableError(path, f"Cannot import models from '{path}'", cause=exc) from exc


@contextlib.contextmanager
def open_repositories(settings: MaskerSettings) -> Iterator[list[MaskingRepository[Any]] | None]:
    """Yield one repository per mapped model, or ``None`` without a database."""
    if not settings.database_url or not settings.models:
        yield None
        return
    base = _import_base(settings.models)
    factory = SqlAlchemySessionFactory(settings.database_url)
    try:
        factory.ping()
        with factory() as session:
            yield discover_repositories(base, session)
    finally:
        factory.dispose()


def perform() -> int:
    """Run bulk masking once; ``0`` on completion, ``1`` when refused."""
    try:
        settings = SettingsFactory.create(MaskerSettings, loaders=[DotenvSettingsLoader()])
    except ConfigError as exc:
        _log.error("masking.config_invalid", **exc.log_fields())
        return 1
    LoggerFactory.configure(level=settings.log_level_number, json_output=settings.log_json)

    try:
        with open_repositories(settings) as repositories:
            BulkMaskingRunner(repositories, settings).run()
    except (PersistenceUnavailableError, EnvironmentGuardRejectedError) as exc:
        _log.error("masking.aborted", **exc.log_fields())
        return 1
    return 0


def main() -> None:
    sys.exit(perform())
