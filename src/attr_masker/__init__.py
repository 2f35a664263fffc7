"""
attr_masker – declarative attribute masking for data models.

Import path convention::

    from attr_masker.application.masking import Maskable, method, call
    from attr_masker.application.masking import BulkMaskingRunner, perform
    from attr_masker.kernel.errors import UnconfiguredAttributeError
    from attr_masker.adapters.sqlalchemy import SqlAlchemyMaskingRepository
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
