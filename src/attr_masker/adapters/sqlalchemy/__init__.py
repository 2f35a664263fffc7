"""SQLAlchemy adapter – sessions and masking repositories."""
from attr_masker.adapters.sqlalchemy.repository import SqlAlchemyMaskingRepository, discover_repositories
from attr_masker.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = [
    "SqlAlchemyMaskingRepository",
    "SqlAlchemySessionFactory",
    "discover_repositories",
]
