"""SQLAlchemy adapter – SqlAlchemyMaskingRepository."""
from __future__ import annotations

from typing import Any, Generic, Mapping, Sequence, TypeVar

from sqlalchemy import func, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attr_masker.kernel.errors import PerRecordUpdateFailedError
from attr_masker.kernel.persistence import MaskingRepository

TModel = TypeVar("TModel")


class SqlAlchemyMaskingRepository(MaskingRepository[TModel], Generic[TModel]):
    """Masking repository over one mapped class.

    Each :meth:`update_by_id` is a single ``UPDATE`` committed on its own;
    on failure the transaction is rolled back and the row keeps its
    previous values.
    """

    def __init__(self, session: Session, model: type[TModel]) -> None:
        self._session = session
        self.model = model
        self._mapper = inspect(model)

    def exists(self) -> bool:
        table = self._mapper.local_table
        connection = self._session.connection(bind_arguments={"mapper": self._mapper})
        return inspect(connection).has_table(table.name, schema=table.schema)

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(self.model)) or 0

    def list_all(self) -> Sequence[TModel]:
        stmt = select(self.model).order_by(*self._mapper.primary_key)
        return list(self._session.scalars(stmt))

    def update_by_id(self, id: Any, fields: Mapping[str, Any]) -> bool:  # noqa: A002
        key = id if isinstance(id, tuple) else (id,)
        conditions = [column == value for column, value in zip(self._mapper.primary_key, key)]
        stmt = (
            update(self.model)
            .where(*conditions)
            .values(**dict(fields))
            .execution_options(synchronize_session=False)
        )
        try:
            result = self._session.execute(stmt)
            if result.rowcount != 1:
                self._session.rollback()
                return False
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise PerRecordUpdateFailedError(self.model.__name__, id, cause=exc) from exc
        return True

    def identity(self, record: TModel) -> Any:
        key = self._mapper.primary_key_from_instance(record)
        return key[0] if len(key) == 1 else tuple(key)


def discover_repositories(base: Any, session: Session) -> list[SqlAlchemyMaskingRepository[Any]]:
    """One repository per class mapped under the declarative *base*, by class name."""
    models = sorted((mapper.class_ for mapper in base.registry.mappers), key=lambda cls: cls.__name__)
    return [SqlAlchemyMaskingRepository(session, model) for model in models]


__all__ = ["SqlAlchemyMaskingRepository", "discover_repositories"]
