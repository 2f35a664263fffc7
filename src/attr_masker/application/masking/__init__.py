"""Application attribute masking."""
from attr_masker.application.masking.evaluator import OptionEvaluator
from attr_masker.application.masking.maskers import (
    HashMasker,
    Masker,
    PartialMasker,
    SimpleMasker,
    TokenizeMasker,
    resolve_masker,
)
from attr_masker.application.masking.marshalers import JsonMarshaler, Marshaler, PickleMarshaler
from attr_masker.application.masking.model import UNSET, Maskable, masked
from attr_masker.application.masking.options import Call, MaskingOptions, MethodRef, call, method
from attr_masker.application.masking.performer import main, perform
from attr_masker.application.masking.registry import MaskerRegistry
from attr_masker.application.masking.runner import (
    BulkMaskingRunner,
    MaskingReport,
    ModelReport,
    ModelStatus,
    RecordOutcome,
)

__all__ = [
    "BulkMaskingRunner",
    "Call",
    "HashMasker",
    "JsonMarshaler",
    "Marshaler",
    "Maskable",
    "Masker",
    "MaskerRegistry",
    "MaskingOptions",
    "MaskingReport",
    "MethodRef",
    "ModelReport",
    "ModelStatus",
    "OptionEvaluator",
    "PartialMasker",
    "PickleMarshaler",
    "RecordOutcome",
    "SimpleMasker",
    "TokenizeMasker",
    "UNSET",
    "call",
    "main",
    "masked",
    "method",
    "perform",
    "resolve_masker",
]
