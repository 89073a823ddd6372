"""
Run Summary

Data classes describing the outcome of one ingest run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RunReason(Enum):
    """Terminal state of a run."""
    NO_CSV = "NO_CSV"
    PARSE_ERROR = "PARSE_ERROR"
    COMPLETED = "COMPLETED"


COMPLETED_MESSAGE = "Parsed global OCR targets CSV; OCR step not implemented yet."
PROCESSED_MESSAGE = "Parsed global OCR targets CSV and processed selected rows."


@dataclass
class RunSummary:
    """Single end-of-run status and counters."""
    ok: bool
    reason: RunReason
    message: str = ""
    error: Optional[str] = None
    max_files: Any = None
    headers: List[str] = field(default_factory=list)
    total_rows: int = 0
    processed_rows: int = 0
    processed_count: int = 0
    error_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            'ok': self.ok,
            'reason': self.reason.value,
            'message': self.message,
            'error': self.error,
            'max_files': self.max_files,
            'headers': list(self.headers),
            'total_rows': self.total_rows,
            'processed_rows': self.processed_rows,
            'processed_count': self.processed_count,
            'error_count': self.error_count,
        }


@dataclass
class WorkflowResult:
    """Summary plus the output records produced by a run."""
    summary: RunSummary
    output_records: List[Dict[str, str]] = field(default_factory=list)
