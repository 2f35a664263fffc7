"""Marshalers – turn non-string attribute values into bytes before masking."""
from __future__ import annotations

import json
import pickle
from typing import Any, Protocol, runtime_checkable

__all__ = ["JsonMarshaler", "Marshaler", "PickleMarshaler"]


@runtime_checkable
class Marshaler(Protocol):
    def dump(self, value: Any) -> bytes: ...
    def load(self, data: bytes) -> Any: ...


class PickleMarshaler:
    """Default marshaler: any picklable Python value."""

    @staticmethod
    def dump(value: Any) -> bytes:
        return pickle.dumps(value)

    @staticmethod
    def load(data: bytes) -> Any:
        return pickle.loads(data)  # noqa: S301


class JsonMarshaler:
    """UTF-8 JSON marshaler for JSON-compatible values."""

    def __init__(self, sort_keys: bool = True) -> None:
        self._sort_keys = sort_keys

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, sort_keys=self._sort_keys, ensure_ascii=False).encode()

    def load(self, data: bytes) -> Any:
        return json.loads(data)
