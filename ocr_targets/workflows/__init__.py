"""High-level workflows"""
from ocr_targets.workflows.ocr_targets import (
    EmissionMode,
    WorkflowConfig,
    resolve_row_limit,
    run_ocr_targets_workflow,
)
from ocr_targets.workflows.summary import RunReason, RunSummary, WorkflowResult

__all__ = [
    "EmissionMode",
    "WorkflowConfig",
    "resolve_row_limit",
    "run_ocr_targets_workflow",
    "RunReason",
    "RunSummary",
    "WorkflowResult",
]
