"""Masking options – the configuration record of one maskable attribute.

Option values are literals unless wrapped with :func:`method` or
:func:`call`; those are resolved against a model instance right before
masking::

    User.attr_masker("email", if_=method("is_active"), key=call(lambda u: u.salt))
"""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Mapping

from attr_masker.application.masking.maskers import SimpleMasker, resolve_masker
from attr_masker.application.masking.marshalers import PickleMarshaler
from attr_masker.kernel.errors import MaskerConfigurationError

__all__ = [
    "Call",
    "MaskingOptions",
    "MethodRef",
    "OPTION_FIELDS",
    "call",
    "is_deferred",
    "method",
]

DEFAULT_MASKER = SimpleMasker()
DEFAULT_MARSHALER = PickleMarshaler()

# ``if`` is a keyword, so mappings may use either spelling.
_ALIASES = {"if": "if_"}


@dataclasses.dataclass(frozen=True)
class MethodRef:
    """Calls ``instance.<name>()`` at evaluation time."""

    name: str


@dataclasses.dataclass(frozen=True)
class Call:
    """Calls ``fn(instance)`` at evaluation time."""

    fn: Callable[[Any], Any]


def method(name: str) -> MethodRef:
    return MethodRef(name)


def call(fn: Callable[[Any], Any]) -> Call:
    return Call(fn)


def is_deferred(value: Any) -> bool:
    return isinstance(value, (MethodRef, Call))


def _instantiate(value: Any, option: str) -> Any:
    """Classes given as strategies or marshalers are instantiated without arguments."""
    if not isinstance(value, type):
        return value
    try:
        return value()
    except TypeError as exc:
        raise MaskerConfigurationError(
            f"{value.__name__} must be passed as an instance (it takes constructor arguments)",
            option=option,
            cause=exc,
        ) from exc


@dataclasses.dataclass(frozen=True)
class MaskingOptions:
    """Options governing how one attribute is masked.

    ``attribute`` is the virtual attribute the masked value is written to;
    it is filled in by :meth:`MaskerRegistry.declare`.  ``column_name``
    overrides the storage column used by bulk masking.  Keys that are not
    fields end up in ``extra`` and are forwarded to the masker.
    """

    attribute: str | None = None
    prefix: str = "masker_"
    suffix: str = ""
    if_: Any = True
    unless: Any = False
    encode: Any = False
    marshal: Any = False
    marshaler: Any = DEFAULT_MARSHALER
    dump_method: str = "dump"
    load_method: str = "load"
    masker: Any = DEFAULT_MASKER
    mask_method: str = "mask"
    column_name: str | None = None
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    # ------------------------------------------------------------------
    # Layering
    # ------------------------------------------------------------------

    def merge(self, overrides: MaskingOptions | Mapping[str, Any] | None = None) -> MaskingOptions:
        """Return a new record with *overrides* layered on top; overrides win."""
        if overrides is None:
            return self
        if isinstance(overrides, MaskingOptions):
            overrides = overrides.to_dict()
        known: dict[str, Any] = {}
        extra = dict(self.extra)
        for key, value in overrides.items():
            key = _ALIASES.get(key, key)
            if key == "extra":
                extra.update(value)
            elif key in OPTION_FIELDS:
                known[key] = value
            else:
                extra[key] = value
        return dataclasses.replace(self, **known, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        data = {name: getattr(self, name) for name in OPTION_FIELDS}
        data.update(self.extra)
        return data

    def deferred(self) -> list[str]:
        """Names of options still waiting for an instance to be evaluated."""
        return [name for name, value in self.to_dict().items() if is_deferred(value)]

    def validated(self) -> MaskingOptions:
        """Check literal strategy/marshaler objects and resolve named maskers.

        Raises :class:`MaskerConfigurationError` when the masker lacks a
        callable ``mask_method`` or, with marshaling enabled, when the
        marshaler lacks ``dump_method``/``load_method``.
        """
        masker = self.masker
        if not is_deferred(masker):
            masker = _instantiate(resolve_masker(masker), "masker")
            if not callable(getattr(masker, self.mask_method, None)):
                raise MaskerConfigurationError(
                    f"Masker {masker!r} has no callable '{self.mask_method}'",
                    option="masker",
                )
        marshaler = self.marshaler
        if self.marshal and not is_deferred(marshaler):
            marshaler = _instantiate(marshaler, "marshaler")
            for operation in (self.dump_method, self.load_method):
                if not callable(getattr(marshaler, operation, None)):
                    raise MaskerConfigurationError(
                        f"Marshaler {marshaler!r} has no callable '{operation}'",
                        option="marshaler",
                    )
        return dataclasses.replace(self, masker=masker, marshaler=marshaler)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def storage_column(self) -> str | None:
        return self.column_name or self.attribute

    @property
    def gate_open(self) -> bool:
        return bool(self.if_) and not self.unless

    def dump(self, value: Any) -> Any:
        return getattr(self.marshaler, self.dump_method)(value)

    def load(self, data: Any) -> Any:
        return getattr(self.marshaler, self.load_method)(data)


OPTION_FIELDS: tuple[str, ...] = tuple(
    f.name for f in dataclasses.fields(MaskingOptions) if f.name != "extra"
)
