"""Application-layer errors – guards around use cases."""

from __future__ import annotations

from typing import Any

from attr_masker.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class EnvironmentGuardRejectedError(ApplicationError):
    """A destructive run was refused because of the running environment."""

    default_code = "environment_guard_rejected"

    def __init__(
        self,
        environment: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Refusing to mask data in the '{environment}' environment",
            detail={"environment": environment},
            **kwargs,
        )
        self.environment = environment


__all__ = [
    "ApplicationError",
    "EnvironmentGuardRejectedError",
]
