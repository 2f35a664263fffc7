"""Option evaluation against a model instance."""
from __future__ import annotations

import dataclasses
from typing import Any

from attr_masker.application.masking.options import OPTION_FIELDS, Call, MaskingOptions, MethodRef

__all__ = ["OptionEvaluator"]


class OptionEvaluator:
    """Resolves :class:`MethodRef` and :class:`Call` options for one instance.

    Nothing is cached: gates and keys may depend on instance state, so every
    masking call evaluates the record again.  A method reference naming a
    missing method raises the usual :class:`AttributeError`.
    """

    def evaluate(self, record: MaskingOptions, instance: Any) -> MaskingOptions:
        resolved = {name: self.resolve(getattr(record, name), instance) for name in OPTION_FIELDS}
        extra = {key: self.resolve(value, instance) for key, value in record.extra.items()}
        return dataclasses.replace(record, **resolved, extra=extra)

    def resolve(self, value: Any, instance: Any) -> Any:
        if isinstance(value, MethodRef):
            return getattr(instance, value.name)()
        if isinstance(value, Call):
            return value.fn(instance)
        return value
