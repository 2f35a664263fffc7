"""Infrastructure errors – persistence failures around bulk masking."""

from __future__ import annotations

from typing import Any

from attr_masker.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class PersistenceUnavailableError(InfrastructureError):
    """No usable persistence layer (missing configuration or connection)."""

    default_code = "persistence_unavailable"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Persistence layer '{resource}' is unavailable", **kwargs)
        self.resource = resource


class PerRecordUpdateFailedError(InfrastructureError):
    """Writing the masked columns of one record failed; the row is untouched."""

    default_code = "per_record_update_failed"

    def __init__(
        self,
        model: str,
        record_id: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Could not update {model} '{record_id}'",
            detail={"model": model, "record_id": record_id},
            **kwargs,
        )
        self.model = model
        self.record_id = record_id


__all__ = [
    "InfrastructureError",
    "PerRecordUpdateFailedError",
    "PersistenceUnavailableError",
]
