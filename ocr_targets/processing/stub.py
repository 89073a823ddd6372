"""Placeholder processor used until an OCR backend is wired in."""

from typing import Dict

from ocr_targets.processing.base import RowProcessor, RowResult, RowStatus

NOT_IMPLEMENTED_MESSAGE = "not implemented yet"


class NotImplementedProcessor(RowProcessor):
    """Marks every row as skipped."""

    name = "not-implemented"

    def process(self, record: Dict[str, str]) -> RowResult:
        return RowResult(status=RowStatus.SKIPPED, result="", error=NOT_IMPLEMENTED_MESSAGE)
