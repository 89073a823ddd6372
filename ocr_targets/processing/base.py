"""
Row Processor Base

Capability interface for the per-row OCR/enrichment step. The workflow calls
process() once per selected record, in order, and converts any exception it
raises into an ERROR status on that row only.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class RowStatus(Enum):
    """Processing status reported for each output record."""
    DONE = "DONE"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"


# Keys appended to every output record, overriding same-named input columns
STATUS_FIELDS = ('ocr_status', 'ocr_result', 'ocr_error')


@dataclass(frozen=True)
class RowResult:
    """Outcome of processing one record."""
    status: RowStatus
    result: str = ""
    error: str = ""

    def to_fields(self) -> Dict[str, str]:
        """Status fields appended to the output record."""
        return dict(zip(STATUS_FIELDS, (self.status.value, self.result, self.error)))


class RowProcessor(ABC):
    """Base class for per-row processing backends."""

    name: str = "base"

    @abstractmethod
    def process(self, record: Dict[str, str]) -> RowResult:
        """
        Process a single record.

        Args:
            record: Mapped record (canonical or identity)

        Returns:
            RowResult describing the outcome

        Raises:
            RowProcessingError: If the record cannot be processed
        """
        raise NotImplementedError
