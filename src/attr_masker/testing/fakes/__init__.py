"""Testing fakes – in-memory doubles for kernel ports."""
from attr_masker.testing.fakes.repository import InMemoryMaskingRepository

__all__ = ["InMemoryMaskingRepository"]
