"""Kernel persistence – repository port used by bulk masking."""
from attr_masker.kernel.persistence.repository import MaskingRepository

__all__ = ["MaskingRepository"]
