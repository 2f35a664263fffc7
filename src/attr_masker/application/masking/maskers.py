"""Masking strategies.

A strategy receives a context mapping holding at least ``value`` (the
stringified or marshaled attribute value) and ``attribute`` (the logical
attribute name), plus every extra option declared for the attribute.
"""
from __future__ import annotations

import hashlib
import uuid
from typing import Any, Mapping, Protocol, runtime_checkable

from attr_masker.kernel.errors import MaskerConfigurationError

__all__ = [
    "HashMasker",
    "Masker",
    "PartialMasker",
    "SimpleMasker",
    "TokenizeMasker",
    "resolve_masker",
]

MaskContext = Mapping[str, Any]


@runtime_checkable
class Masker(Protocol):
    def mask(self, context: MaskContext) -> str | bytes: ...


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode()


class SimpleMasker:
    """Replaces any value with a fixed string."""

    REDACTED = "(redacted)"

    def mask(self, context: MaskContext) -> str:
        return self.REDACTED

    __call__ = mask


class HashMasker:
    """Salted SHA-256 digest, truncated to ``length`` hex characters."""

    def __init__(self, salt: str = "", length: int = 8) -> None:
        self._salt = salt
        self._length = length

    def mask(self, context: MaskContext) -> str:
        salt = str(context.get("salt", self._salt))
        length = int(context.get("length", self._length))
        digest = hashlib.sha256(salt.encode() + _as_bytes(context["value"])).hexdigest()
        return digest[:length]

    __call__ = mask


class PartialMasker:
    """Keeps the first/last few characters and hides the middle."""

    def __init__(self, show_start: int = 2, show_end: int = 2, mask_char: str = "*") -> None:
        self._show_start = show_start
        self._show_end = show_end
        self._mask_char = mask_char

    def mask(self, context: MaskContext) -> str:
        raw = context["value"]
        s = raw.decode(errors="replace") if isinstance(raw, bytes) else str(raw)
        start = int(context.get("show_start", self._show_start))
        end = int(context.get("show_end", self._show_end))
        mask_char = str(context.get("mask_char", self._mask_char))
        length = len(s)
        if length <= start + end:
            return mask_char * length
        hidden = mask_char * (length - start - end)
        return s[:start] + hidden + (s[-end:] if end else "")

    __call__ = mask


class TokenizeMasker:
    """Deterministic UUID-shaped token derived from a salted digest."""

    def __init__(self, salt: str = "") -> None:
        self._salt = salt

    def mask(self, context: MaskContext) -> str:
        salt = str(context.get("salt", self._salt))
        digest = hashlib.sha256(salt.encode() + _as_bytes(context["value"])).hexdigest()
        return str(uuid.UUID(digest[:32]))

    __call__ = mask


_NAMED_MASKERS: dict[str, Any] = {
    "simple": SimpleMasker(),
    "redact": SimpleMasker(),
    "hash": HashMasker(),
    "partial": PartialMasker(),
    "tokenize": TokenizeMasker(),
}


def resolve_masker(masker: Any) -> Any:
    """Return the strategy object for *masker*.

    Strings are looked up among the built-in strategies; anything else is
    returned as-is.
    """
    if isinstance(masker, str):
        try:
            return _NAMED_MASKERS[masker]
        except KeyError:
            raise MaskerConfigurationError(
                f"Unknown masker '{masker}' (expected one of {sorted(_NAMED_MASKERS)})",
                option="masker",
            ) from None
    return masker
