"""Unit tests for the SQLAlchemy adapter (sessions, masking repository, discovery).

Uses an in-memory SQLite database; no running server needed.
"""
from __future__ import annotations

import pytest
from sqlalchemy import Integer, String, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from attr_masker.adapters.sqlalchemy import (
    SqlAlchemyMaskingRepository,
    SqlAlchemySessionFactory,
    discover_repositories,
)
from attr_masker.application.masking import BulkMaskingRunner, Maskable, ModelStatus
from attr_masker.config.settings import MaskerSettings
from attr_masker.kernel.errors import (
    EnvironmentGuardRejectedError,
    PerRecordUpdateFailedError,
    PersistenceUnavailableError,
)

# ---------------------------------------------------------------------------
# Shared ORM base and test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Customer(Maskable, Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    ssn: Mapped[str] = mapped_column(String(20), nullable=False)
    masker_email: Mapped[str | None] = mapped_column(String(100), nullable=True)


Customer.attr_masker("email")
Customer.attr_masker("ssn", column_name="ssn", masker="partial", show_start=0, show_end=4)


class AuditEntry(Base):
    __tablename__ = "audit_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    action: Mapped[str] = mapped_column(String(50))


class Archived(Maskable, Base):
    __tablename__ = "archived"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(100))


Archived.attr_masker("email", column_name="email")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine, tables=[Customer.__table__, AuditEntry.__table__])
    with Session(engine, expire_on_commit=False) as s:
        s.add_all([
            Customer(id=2, email="b@example.com", ssn="222-22-2222"),
            Customer(id=1, email="a@example.com", ssn="111-11-1111"),
            AuditEntry(id=1, action="login"),
        ])
        s.commit()
        yield s
    engine.dispose()


def _row(session: Session, customer_id: int) -> Customer:
    session.expire_all()
    return session.scalars(select(Customer).where(Customer.id == customer_id)).one()


# ---------------------------------------------------------------------------
# SqlAlchemyMaskingRepository
# ---------------------------------------------------------------------------


class TestRepository:
    def test_exists(self, session) -> None:
        assert SqlAlchemyMaskingRepository(session, Customer).exists() is True
        assert SqlAlchemyMaskingRepository(session, Archived).exists() is False

    def test_count(self, session) -> None:
        assert SqlAlchemyMaskingRepository(session, Customer).count() == 2

    def test_list_all_ordered_by_primary_key(self, session) -> None:
        records = SqlAlchemyMaskingRepository(session, Customer).list_all()
        assert [record.id for record in records] == [1, 2]

    def test_identity(self, session) -> None:
        repo = SqlAlchemyMaskingRepository(session, Customer)
        assert repo.identity(repo.list_all()[0]) == 1

    def test_update_by_id(self, session) -> None:
        repo = SqlAlchemyMaskingRepository(session, Customer)
        assert repo.update_by_id(1, {"masker_email": "(redacted)", "ssn": "***"}) is True
        row = _row(session, 1)
        assert row.masker_email == "(redacted)"
        assert row.ssn == "***"
        assert _row(session, 2).masker_email is None

    def test_update_unknown_id(self, session) -> None:
        assert SqlAlchemyMaskingRepository(session, Customer).update_by_id(99, {"ssn": "x"}) is False

    def test_failed_update_leaves_row_untouched(self, session) -> None:
        repo = SqlAlchemyMaskingRepository(session, Customer)
        with pytest.raises(PerRecordUpdateFailedError) as exc_info:
            repo.update_by_id(1, {"masker_email": "(redacted)", "email": None})
        assert exc_info.value.record_id == 1
        row = _row(session, 1)
        assert row.email == "a@example.com"
        assert row.masker_email is None

    def test_session_usable_after_failure(self, session) -> None:
        repo = SqlAlchemyMaskingRepository(session, Customer)
        with pytest.raises(PerRecordUpdateFailedError):
            repo.update_by_id(1, {"email": None})
        assert repo.update_by_id(2, {"masker_email": "x"}) is True


class TestDiscovery:
    def test_one_repository_per_mapped_class_sorted(self, session) -> None:
        repos = discover_repositories(Base, session)
        assert [repo.model.__name__ for repo in repos] == ["Archived", "AuditEntry", "Customer"]


class TestBulkRunOverSqlite:
    def test_masks_rows(self, session) -> None:
        runner = BulkMaskingRunner(discover_repositories(Base, session), MaskerSettings(environment="test"))
        report = runner.run()

        assert report.get("Archived").status is ModelStatus.SKIPPED
        assert report.get("AuditEntry").status is ModelStatus.NOTHING_TO_DO
        assert report.get("Customer").masked == 2
        assert report.ok

        row = _row(session, 1)
        assert row.masker_email == "(redacted)"
        assert row.ssn == "*******1111"
        assert row.email == "a@example.com"

    def test_production_guard(self, session) -> None:
        runner = BulkMaskingRunner(discover_repositories(Base, session), MaskerSettings(environment="production"))
        with pytest.raises(EnvironmentGuardRejectedError):
            runner.run()
        assert _row(session, 1).masker_email is None


# ---------------------------------------------------------------------------
# SqlAlchemySessionFactory
# ---------------------------------------------------------------------------


class TestSessionFactory:
    def test_returns_session(self) -> None:
        factory = SqlAlchemySessionFactory("sqlite://")
        with factory() as s:
            assert isinstance(s, Session)
        factory.ping()
        factory.dispose()

    def test_invalid_url(self) -> None:
        with pytest.raises(PersistenceUnavailableError):
            SqlAlchemySessionFactory("not a url")

    def test_ping_failure(self, tmp_path) -> None:
        factory = SqlAlchemySessionFactory(f"sqlite:///{tmp_path}/missing/dir/db.sqlite")
        with pytest.raises(PersistenceUnavailableError) as exc_info:
            factory.ping()
        assert exc_info.value.cause is not None
        factory.dispose()
