"""Masking repository port – the persistence surface bulk masking needs."""

from __future__ import annotations

import abc
from typing import Any, Generic, Mapping, Sequence, TypeVar

TModel = TypeVar("TModel")


class MaskingRepository(abc.ABC, Generic[TModel]):
    """Port: every persisted record of one model type.

    Concrete implementations live in ``adapters/sqlalchemy`` and
    ``testing/fakes``.
    """

    model: type[TModel]

    @abc.abstractmethod
    def exists(self) -> bool:
        """Whether the backing table / collection exists."""

    @abc.abstractmethod
    def count(self) -> int: ...

    @abc.abstractmethod
    def list_all(self) -> Sequence[TModel]:
        """All records, in a stable order."""

    @abc.abstractmethod
    def update_by_id(self, id: Any, fields: Mapping[str, Any]) -> bool:  # noqa: A002
        """Write *fields* to one record atomically; ``False`` if nothing was updated."""

    def identity(self, record: TModel) -> Any:
        return record.id  # type: ignore[attr-defined]


__all__ = ["MaskingRepository"]
