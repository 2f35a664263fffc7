"""Maskable – opt-in masking capability for model classes."""
from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

from attr_masker.application.masking.evaluator import OptionEvaluator
from attr_masker.application.masking.options import MaskingOptions
from attr_masker.application.masking.registry import MaskerRegistry

__all__ = ["Maskable", "UNSET", "masked"]

T = TypeVar("T", bound=type)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class Maskable:
    """Mixin giving a class its own :class:`MaskerRegistry`.

    Each subclass gets a registry derived from its parent's when the class
    is created, so declarations are inherited and can be redeclared::

        class User(Maskable):
            def __init__(self, email: str) -> None:
                self.email = email

        User.attr_masker("email")
        User("a@b.com").mask("email")        # "(redacted)"

    Works alongside SQLAlchemy models (``class User(Maskable, Base)``).
    """

    masker_registry = MaskerRegistry("Maskable")
    masker_evaluator = OptionEvaluator()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.masker_registry = MaskerRegistry.derive_from(cls.masker_registry, owner=cls.__qualname__)

    # ------------------------------------------------------------------
    # Class-level API
    # ------------------------------------------------------------------

    @classmethod
    def attr_masker(cls, *attributes: str, **overrides: Any) -> None:
        cls.masker_registry.declare(*attributes, **overrides)

    @classmethod
    def attr_masker_options(cls, **overrides: Any) -> MaskingOptions:
        """Layer *overrides* onto the defaults used by later declarations."""
        return cls.masker_registry.configure_defaults(**overrides)

    @classmethod
    def is_attr_masker(cls, attribute: str) -> bool:
        return cls.masker_registry.is_maskable(attribute)

    @classmethod
    def masker_attributes(cls) -> Mapping[str, MaskingOptions]:
        return cls.masker_registry.attributes

    @classmethod
    def mask_value(cls, attribute: str, value: Any, **overrides: Any) -> Any:
        return cls.masker_registry.mask(attribute, value, overrides)

    @classmethod
    def masker_dispatch(cls, name: str, *args: Any, **kwargs: Any) -> Any:
        """Route ``mask_<attribute>`` names to :meth:`mask_value`.

        Other names resolve as ordinary class attributes, so a missing one
        raises the usual :class:`AttributeError`.
        """
        attribute = cls.masker_registry.route(name)
        if attribute is not None:
            return cls.mask_value(attribute, *args, **kwargs)
        return getattr(cls, name)(*args, **kwargs)

    # ------------------------------------------------------------------
    # Instance-level API
    # ------------------------------------------------------------------

    def mask(self, attribute: str, value: Any = UNSET) -> Any:
        """Mask *value* (default: the current value of *attribute*).

        Options are evaluated against ``self`` first; the instance is not
        modified.
        """
        registry = type(self).masker_registry
        record = registry.effective_record(attribute)
        if value is UNSET:
            value = getattr(self, attribute)
        evaluated = self.masker_evaluator.evaluate(record, self)
        return registry.mask(attribute, value, evaluated)

    def mask_in_place(self, *attributes: str) -> dict[str, Any]:
        """Write masked values into their virtual attributes on ``self``.

        Masks every declared attribute when none are given.
        """
        registry = type(self).masker_registry
        written: dict[str, Any] = {}
        for attribute in attributes or tuple(registry):
            virtual = registry.effective_record(attribute).attribute
            written[virtual] = self.mask(attribute)
            setattr(self, virtual, written[virtual])
        return written

    def masked_updates(self) -> dict[str, Any]:
        """Storage column -> masked value, for every declared attribute."""
        registry = type(self).masker_registry
        return {
            registry.effective_record(attribute).storage_column: self.mask(attribute)
            for attribute in registry
        }


def masked(*attributes: str, **overrides: Any) -> Callable[[T], T]:
    """Class decorator form of :meth:`Maskable.attr_masker`.

    ::

        @masked("ssn", masker="partial", show_end=4)
        @masked("email")
        class User(Maskable): ...
    """

    def decorator(cls: T) -> T:
        cls.attr_masker(*attributes, **overrides)
        return cls

    return decorator
