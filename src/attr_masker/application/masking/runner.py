"""Bulk masking – mask and persist every record of every maskable model.

DESTRUCTIVE: never point this at production data.  The runner refuses to
start when the configured environment is listed as a production one.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from attr_masker.config.settings import MaskerSettings
from attr_masker.kernel.errors import (
    EnvironmentGuardRejectedError,
    MaskerConfigurationError,
    PerRecordUpdateFailedError,
    PersistenceUnavailableError,
)
from attr_masker.kernel.persistence import MaskingRepository
from attr_masker.observability.logging import get_logger

__all__ = [
    "BulkMaskingRunner",
    "MaskingReport",
    "ModelReport",
    "ModelStatus",
    "RecordOutcome",
]


class ModelStatus(str, Enum):
    MASKED = "masked"
    SKIPPED = "skipped"
    NOTHING_TO_DO = "nothing_to_do"
    ABORTED = "aborted"


@dataclass(frozen=True)
class RecordOutcome:
    record_id: Any
    success: bool
    error: PerRecordUpdateFailedError | None = None


@dataclass
class ModelReport:
    model: str
    status: ModelStatus
    outcomes: list[RecordOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def masked(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> list[RecordOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]


@dataclass
class MaskingReport:
    models: list[ModelReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(
            report.status is not ModelStatus.ABORTED and not report.failed
            for report in self.models
        )

    def get(self, model: str) -> ModelReport | None:
        return next((report for report in self.models if report.model == model), None)


class BulkMaskingRunner:
    """Single sequential pass over *repositories*.

    ``repositories`` is ``None`` when no persistence layer is available.
    A record whose masked values cannot be computed or written is reported
    and the pass moves on to the next record; a failure while counting or
    listing records abandons only that model.  An ``AttributeError`` or
    ``MaskerConfigurationError`` raised while masking means the declaration
    itself is broken and ends the run.
    """

    def __init__(
        self,
        repositories: Iterable[MaskingRepository[Any]] | None,
        settings: MaskerSettings,
        logger: Any = None,
    ) -> None:
        self._repositories = repositories
        self._settings = settings
        self._log = logger or get_logger(__name__)

    def check_preconditions(self) -> None:
        if self._repositories is None:
            self._log.error("masking.rejected", reason="persistence unavailable")
            raise PersistenceUnavailableError("repositories", "No persistence layer configured. Nothing to do!")
        if self._settings.is_production:
            self._log.warning("masking.rejected", reason="production environment",
                              environment=self._settings.environment)
            raise EnvironmentGuardRejectedError(self._settings.environment)

    def run(self) -> MaskingReport:
        self.check_preconditions()
        report = MaskingReport()
        for repository in self._repositories or ():
            report.models.append(self._mask_model(repository))
        self._log.info("masking.done", models=len(report.models), ok=report.ok)
        return report

    def _mask_model(self, repository: MaskingRepository[Any]) -> ModelReport:
        name = repository.model.__name__
        log = self._log.bind(model=name)
        registry = getattr(repository.model, "masker_registry", None)
        try:
            if not repository.exists():
                log.info("masking.model.skipped", reason="no backing table")
                return ModelReport(name, ModelStatus.SKIPPED)
            if registry is None or len(registry) < 1 or repository.count() < 1:
                log.info("masking.model.nothing_to_do")
                return ModelReport(name, ModelStatus.NOTHING_TO_DO)
            records = repository.list_all()
        except Exception as exc:  # noqa: BLE001 – abandon this model only
            log.error("masking.model.aborted", error=str(exc))
            return ModelReport(name, ModelStatus.ABORTED, error=str(exc))

        report = ModelReport(name, ModelStatus.MASKED)
        for record in records:
            report.outcomes.append(self._mask_record(repository, record, log))
        log.info("masking.model.done", masked=report.masked, failed=len(report.failed))
        return report

    def _mask_record(self, repository: MaskingRepository[Any], record: Any, log: Any) -> RecordOutcome:
        name = repository.model.__name__
        record_id = repository.identity(record)
        try:
            updates = record.masked_updates()
        except (AttributeError, MaskerConfigurationError):
            # Broken declarations (missing gate methods, deferred options) stop the run.
            raise
        except Exception as exc:  # noqa: BLE001 – reported, pass continues
            error = PerRecordUpdateFailedError(name, record_id, "Could not compute masked values", cause=exc)
            return self._failed(log, record_id, error)
        try:
            if not repository.update_by_id(record_id, updates):
                raise PerRecordUpdateFailedError(name, record_id, "No row matched the record id")
        except PerRecordUpdateFailedError as exc:
            return self._failed(log, record_id, exc)
        except Exception as exc:  # noqa: BLE001 – reported, pass continues
            return self._failed(log, record_id, PerRecordUpdateFailedError(name, record_id, cause=exc))
        log.info("masking.record", record_id=record_id, outcome="ok")
        return RecordOutcome(record_id, success=True)

    @staticmethod
    def _failed(log: Any, record_id: Any, error: PerRecordUpdateFailedError) -> RecordOutcome:
        log.error("masking.record", record_id=record_id, outcome="failed", error=error.message,
                  cause=repr(error.cause) if error.cause else None)
        return RecordOutcome(record_id, success=False, error=error)
