"""SQLAlchemy adapter – SqlAlchemySessionFactory."""
from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from attr_masker.kernel.errors import PersistenceUnavailableError


class SqlAlchemySessionFactory:
    """Creates synchronous SQLAlchemy sessions from an engine URL."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        try:
            url = make_url(database_url)
            self._engine = create_engine(url, **engine_kwargs)
        except (SQLAlchemyError, ImportError, ValueError) as exc:
            raise PersistenceUnavailableError("database", f"Cannot create engine: {exc}", cause=exc) from exc
        self._resource = url.render_as_string(hide_password=True)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    def __call__(self) -> Session:
        return self._session_factory()

    @property
    def engine(self) -> Engine:
        return self._engine

    def ping(self) -> None:
        """Open a connection once; raises :class:`PersistenceUnavailableError` on failure."""
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise PersistenceUnavailableError(self._resource, cause=exc) from exc

    def dispose(self) -> None:
        self._engine.dispose()


__all__ = ["SqlAlchemySessionFactory"]
