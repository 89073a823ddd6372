"""OCR Targets Ingest Package"""

# Expose key components at package level for convenience

# Exceptions (centralized)
from ocr_targets.exceptions import (
    OcrTargetsError,
    CsvParseError,
    RowProcessingError,
    SinkError,
    InputError,
)

# CSV
from ocr_targets.csv.tokenizer import parse_csv
from ocr_targets.csv.records import CsvRecordSet, matrix_to_records

# Mapping
from ocr_targets.mapping.canonical import CANONICAL_FIELDS, FieldMapping, remap_canonical

# Processing
from ocr_targets.processing.base import RowProcessor, RowResult, RowStatus
from ocr_targets.processing.stub import NotImplementedProcessor

# Sinks
from ocr_targets.sinks.base import RowSink, SummarySink
from ocr_targets.sinks.memory import MemoryRowSink, MemorySummarySink
from ocr_targets.sinks.local_storage import DatasetRowSink, KeyValueSummarySink

# Workflows
from ocr_targets.workflows.ocr_targets import (
    EmissionMode,
    WorkflowConfig,
    resolve_row_limit,
    run_ocr_targets_workflow,
)
from ocr_targets.workflows.summary import RunReason, RunSummary, WorkflowResult

__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "OcrTargetsError",
    "CsvParseError",
    "RowProcessingError",
    "SinkError",
    "InputError",
    # CSV
    "parse_csv",
    "CsvRecordSet",
    "matrix_to_records",
    # Mapping
    "CANONICAL_FIELDS",
    "FieldMapping",
    "remap_canonical",
    # Processing
    "RowProcessor",
    "RowResult",
    "RowStatus",
    "NotImplementedProcessor",
    # Sinks
    "RowSink",
    "SummarySink",
    "MemoryRowSink",
    "MemorySummarySink",
    "DatasetRowSink",
    "KeyValueSummarySink",
    # Workflows
    "EmissionMode",
    "WorkflowConfig",
    "resolve_row_limit",
    "run_ocr_targets_workflow",
    "RunReason",
    "RunSummary",
    "WorkflowResult",
]
