"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                     (domain.py)
    │   ├── ValidationError
    │   │   └── MaskerConfigurationError
    │   └── UnconfiguredAttributeError
    ├── ApplicationError                (application.py)
    │   └── EnvironmentGuardRejectedError
    └── InfrastructureError             (infrastructure.py)
        ├── PersistenceUnavailableError
        └── PerRecordUpdateFailedError
"""

from attr_masker.kernel.errors.application import (
    ApplicationError,
    EnvironmentGuardRejectedError,
)
from attr_masker.kernel.errors.base import BaseError
from attr_masker.kernel.errors.domain import (
    DomainError,
    MaskerConfigurationError,
    UnconfiguredAttributeError,
    ValidationError,
)
from attr_masker.kernel.errors.infrastructure import (
    InfrastructureError,
    PerRecordUpdateFailedError,
    PersistenceUnavailableError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "EnvironmentGuardRejectedError",
    "InfrastructureError",
    "MaskerConfigurationError",
    "PerRecordUpdateFailedError",
    "PersistenceUnavailableError",
    "UnconfiguredAttributeError",
    "ValidationError",
]
