"""Unit tests for the bulk masking entry point (perform / main)."""
from __future__ import annotations

import importlib
import sys
import textwrap

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session
from structlog.testing import capture_logs

from attr_masker.application.masking import performer

_MODULE = "perform_models"

_MODELS = textwrap.dedent(
    """
    from sqlalchemy import Integer, String
    from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

    from attr_masker.application.masking import Maskable


    class Base(DeclarativeBase):
        pass


    class Customer(Maskable, Base):
        __tablename__ = "customers"

        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        email: Mapped[str] = mapped_column(String(100))
        masker_email: Mapped[str | None] = mapped_column(String(100), nullable=True)


    Customer.attr_masker("email")
    """
)


class _FakeLoggerFactory:
    calls: list[dict] = []

    @classmethod
    def configure(cls, **kwargs) -> None:
        cls.calls.append(kwargs)


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch: pytest.MonkeyPatch):
    for key in (
        "ATTR_MASKER_ENVIRONMENT",
        "ATTR_MASKER_PRODUCTION_ENVIRONMENTS",
        "ATTR_MASKER_DATABASE_URL",
        "ATTR_MASKER_MODELS",
        "ATTR_MASKER_LOG_LEVEL",
        "ATTR_MASKER_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    _FakeLoggerFactory.calls = []
    monkeypatch.setattr(performer, "LoggerFactory", _FakeLoggerFactory)
    yield
    sys.modules.pop(_MODULE, None)


@pytest.fixture
def database(tmp_path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / f"{_MODULE}.py").write_text(_MODELS)
    monkeypatch.syspath_prepend(str(tmp_path))
    models = importlib.import_module(_MODULE)

    url = f"sqlite:///{tmp_path}/masking.sqlite"
    engine = create_engine(url)
    models.Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all([
            models.Customer(id=1, email="a@example.com"),
            models.Customer(id=2, email="b@example.com"),
        ])
        session.commit()
    engine.dispose()

    monkeypatch.setenv("ATTR_MASKER_DATABASE_URL", url)
    monkeypatch.setenv("ATTR_MASKER_MODELS", f"{_MODULE}:Base")
    return url


def _masked_column(url: str) -> list:
    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            return list(conn.execute(text("SELECT masker_email FROM customers ORDER BY id")).scalars())
    finally:
        engine.dispose()


class TestPerform:
    def test_masks_configured_database(self, database, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_ENVIRONMENT", "staging")
        assert performer.perform() == 0
        assert _masked_column(database) == ["(redacted)", "(redacted)"]

    def test_logging_configured_from_settings(self, database, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_LOG_LEVEL", "debug")
        monkeypatch.setenv("ATTR_MASKER_LOG_JSON", "true")
        performer.perform()
        assert _FakeLoggerFactory.calls == [{"level": 10, "json_output": True}]

    def test_production_refused(self, database, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_ENVIRONMENT", "production")
        assert performer.perform() == 1
        assert _masked_column(database) == [None, None]

    def test_custom_production_names(self, database, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_ENVIRONMENT", "live")
        monkeypatch.setenv("ATTR_MASKER_PRODUCTION_ENVIRONMENTS", "production,live")
        assert performer.perform() == 1
        assert _masked_column(database) == [None, None]

    def test_refusal_logged(self, database, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_ENVIRONMENT", "production")
        with capture_logs() as logs:
            performer.perform()
        [aborted] = [entry for entry in logs if entry["event"] == "masking.aborted"]
        assert aborted["code"] == "environment_guard_rejected"
        assert aborted["environment"] == "production"

    def test_without_database(self) -> None:
        assert performer.perform() == 1

    def test_unimportable_models(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("ATTR_MASKER_MODELS", "no_such_models_module:Base")
        assert performer.perform() == 1

    def test_malformed_models_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("ATTR_MASKER_MODELS", "models.Base")
        assert performer.perform() == 1

    def test_invalid_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTR_MASKER_LOG_LEVEL", "LOUD")
        assert performer.perform() == 1
        assert _FakeLoggerFactory.calls == []

    def test_reads_dotenv(self, database, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("ATTR_MASKER_ENVIRONMENT=production\n")
        monkeypatch.setenv("ATTR_MASKER_ENVIRONMENT", "")
        monkeypatch.delenv("ATTR_MASKER_ENVIRONMENT")
        assert performer.perform() == 1
        assert _masked_column(database) == [None, None]


class TestMain:
    def test_exits_with_perform_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(performer, "perform", lambda: 1)
        with pytest.raises(SystemExit) as exc_info:
            performer.main()
        assert exc_info.value.code == 1
