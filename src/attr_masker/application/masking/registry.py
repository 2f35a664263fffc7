"""Masker registry – per-type store of masking options."""
from __future__ import annotations

import base64
import dataclasses
import re
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from attr_masker.application.masking.maskers import resolve_masker
from attr_masker.application.masking.options import MaskingOptions
from attr_masker.kernel.errors import MaskerConfigurationError, UnconfiguredAttributeError
from attr_masker.observability.logging import get_logger

__all__ = ["MaskerRegistry"]

_DISPATCH_RE = re.compile(r"^mask_(.+)$")

_log = get_logger(__name__)


class MaskerRegistry:
    """Owns the masking options declared for one type.

    A registry starts from its parent's state (see :meth:`derive_from`):
    inherited records and base defaults are copied once, when the type is
    defined.  Later declarations on the parent do not reach existing
    children.

    Usage::

        registry = MaskerRegistry("User")
        registry.declare("email", "ssn")
        registry.mask("email", "a@b.com")   # "(redacted)"
    """

    def __init__(
        self,
        owner: str,
        defaults: MaskingOptions | None = None,
        attributes: Mapping[str, MaskingOptions] | None = None,
    ) -> None:
        self._owner = owner
        self._defaults = defaults or MaskingOptions()
        self._attributes: dict[str, MaskingOptions] = dict(attributes or {})

    @classmethod
    def derive_from(cls, parent: MaskerRegistry | None, owner: str) -> MaskerRegistry:
        if parent is None:
            return cls(owner)
        return cls(owner, defaults=parent.defaults, attributes=parent._attributes)

    def __repr__(self) -> str:
        return f"MaskerRegistry(owner={self._owner!r}, attributes={sorted(self._attributes)!r})"

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def defaults(self) -> MaskingOptions:
        """Base options every future declaration on this type starts from."""
        return self._defaults

    @property
    def attributes(self) -> Mapping[str, MaskingOptions]:
        return MappingProxyType(self._attributes)

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def configure_defaults(self, **overrides: Any) -> MaskingOptions:
        self._defaults = self._defaults.merge(overrides)
        return self._defaults

    def declare(self, *attributes: str, **overrides: Any) -> None:
        """Declare *attributes* maskable.

        The virtual attribute is ``overrides["attribute"]`` when given,
        otherwise ``prefix + name + suffix``.  Redeclaring an attribute
        replaces its record; two attributes sharing a storage column are
        rejected.
        """
        if not attributes:
            raise MaskerConfigurationError("At least one attribute name is required")
        options = self._defaults.merge(overrides)
        if options.attribute and len(attributes) > 1:
            raise MaskerConfigurationError(
                f"An explicit attribute ({options.attribute!r}) can only name one masked attribute",
                option="attribute",
            )
        options = options.validated()
        records = {
            str(name): dataclasses.replace(
                options, attribute=options.attribute or f"{options.prefix}{name}{options.suffix}"
            )
            for name in attributes
        }
        self._check_columns(records)
        for name, record in records.items():
            self._attributes[name] = record
            _log.debug("masker.declared", owner=self._owner, attribute=name, virtual_attribute=record.attribute)

    def _check_columns(self, records: Mapping[str, MaskingOptions]) -> None:
        """Each declared attribute must write to its own storage column."""
        taken = {
            record.storage_column: name
            for name, record in self._attributes.items()
            if name not in records
        }
        for name, record in records.items():
            column = record.storage_column
            if column in taken:
                raise MaskerConfigurationError(
                    f"'{name}' and '{taken[column]}' would both be stored in '{column}'",
                    option="column_name" if record.column_name else "attribute",
                )
            taken[column] = name

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_maskable(self, attribute: str) -> bool:
        return attribute in self._attributes

    def effective_record(self, attribute: str) -> MaskingOptions:
        try:
            return self._attributes[attribute]
        except KeyError:
            raise UnconfiguredAttributeError(self._owner, attribute) from None

    # ------------------------------------------------------------------
    # Masking
    # ------------------------------------------------------------------

    def mask(
        self,
        attribute: str,
        value: Any,
        overrides: MaskingOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Mask *value* as configured for *attribute*.

        When the gate is closed (``if_`` falsy or ``unless`` truthy) the value
        is returned unchanged.
        """
        options = self.effective_record(attribute).merge(overrides)
        pending = options.deferred()
        if pending:
            raise MaskerConfigurationError(
                f"Options {pending} of '{attribute}' must be evaluated against an instance",
                option=pending[0],
            )
        if not options.gate_open:
            return value

        payload = options.dump(value) if options.marshal else str(value)
        masker = resolve_masker(options.masker)
        context = {**options.extra, "attribute": attribute, "value": payload}
        masked = getattr(masker, options.mask_method)(context)
        if options.encode:
            raw = masked if isinstance(masked, bytes) else str(masked).encode()
            masked = base64.b64encode(raw).decode("ascii")
        return masked

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route(self, name: str) -> str | None:
        """Return the attribute a ``mask_<attribute>`` name refers to, if declared."""
        match = _DISPATCH_RE.match(name)
        if match and match.group(1) in self._attributes:
            return match.group(1)
        return None

    def dispatch(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Call :meth:`mask` for a ``mask_<attribute>`` name.

        Any other name raises :class:`AttributeError` like a failed lookup.
        """
        attribute = self.route(name)
        if attribute is None:
            raise AttributeError(f"type object '{self._owner}' has no attribute '{name}'")
        return self.mask(attribute, *args, **kwargs)
