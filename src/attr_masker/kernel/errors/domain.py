"""Domain errors – masking configuration lookups and declarations."""

from __future__ import annotations

from typing import Any

from attr_masker.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a masking rule is queried or declared incorrectly."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class MaskerConfigurationError(ValidationError):
    """A masking declaration references something unusable.

    Raised at declaration time (unknown strategy, marshaler without the
    configured operations) and when a deferred option is used without an
    instance to evaluate it against.
    """

    default_code = "masker_configuration_error"

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        **kwargs: Any,
    ) -> None:
        errors = [{"option": option, "message": message}] if option else None
        super().__init__(message, errors=errors, **kwargs)
        self.option = option


class UnconfiguredAttributeError(DomainError):
    """The attribute was never declared maskable on the owner type."""

    default_code = "unconfigured_attribute"

    def __init__(self, owner: str, attribute: str, **kwargs: Any) -> None:
        super().__init__(
            f"Attribute '{attribute}' is not configured for masking on {owner}",
            detail={"owner": owner, "attribute": attribute},
            **kwargs,
        )
        self.owner = owner
        self.attribute = attribute


__all__ = [
    "DomainError",
    "MaskerConfigurationError",
    "UnconfiguredAttributeError",
    "ValidationError",
]
