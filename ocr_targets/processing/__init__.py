"""Per-row processing backends"""
from ocr_targets.processing.base import STATUS_FIELDS, RowProcessor, RowResult, RowStatus
from ocr_targets.processing.stub import NotImplementedProcessor, NOT_IMPLEMENTED_MESSAGE

__all__ = [
    "RowProcessor",
    "RowResult",
    "RowStatus",
    "STATUS_FIELDS",
    "NotImplementedProcessor",
    "NOT_IMPLEMENTED_MESSAGE",
]
