"""
OCR Targets Workflow Module

Runs one ingest of an OCR targets CSV payload:
1. Check that CSV text was supplied
2. Tokenize and project it into header-keyed records
3. Cap the batch to max_files rows
4. Map each record and run the row processor, isolating per-row failures
5. Emit output records and the run summary to the sinks
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ocr_targets.csv.records import matrix_to_records
from ocr_targets.csv.tokenizer import parse_csv
from ocr_targets.mapping.canonical import FieldMapping, apply_field_mapping
from ocr_targets.processing.base import STATUS_FIELDS, RowProcessor, RowResult, RowStatus
from ocr_targets.processing.stub import NotImplementedProcessor
from ocr_targets.progress.core import ProgressTracker
from ocr_targets.progress.stages import CsvParsingStage, RowProcessingStage
from ocr_targets.sinks.base import RowSink, SummarySink
from ocr_targets.utils import log_section_header
from ocr_targets.workflows.summary import (
    COMPLETED_MESSAGE,
    PROCESSED_MESSAGE,
    RunReason,
    RunSummary,
    WorkflowResult,
)

logger = logging.getLogger(__name__)

Tokenizer = Callable[[str], List[List[str]]]


class EmissionMode(Enum):
    """When output records are handed to the row sink."""
    PER_ROW = "per-row"   # One push per row, as soon as it is processed
    BATCH = "batch"       # One push with the whole batch after the loop


@dataclass
class WorkflowConfig:
    """Workflow behaviour switches."""
    emission: EmissionMode = EmissionMode.PER_ROW
    field_mapping: FieldMapping = FieldMapping.CANONICAL


def resolve_row_limit(max_rows: Any, total_rows: int) -> int:
    """
    Resolve the number of rows to process.

    A numeric cap (int, float or numeric string) limits the batch to
    max(0, cap) rows, rounded down. None, NaN, blank and non-numeric values
    mean no cap.

    Args:
        max_rows: Requested cap as supplied by the caller
        total_rows: Number of records available

    Returns:
        Number of leading records to process

    Example:
        >>> resolve_row_limit("2", 5), resolve_row_limit(None, 5), resolve_row_limit(-3, 5)
        (2, 5, 0)
    """
    if max_rows is None or isinstance(max_rows, bool):
        return total_rows

    try:
        numeric = float(max_rows)
    except OverflowError:
        # Integers beyond float range
        return total_rows if max_rows > 0 else 0
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric row cap {max_rows!r}")
        return total_rows

    if math.isnan(numeric):
        return total_rows

    limit = max(0.0, numeric)
    if limit >= total_rows:
        return total_rows
    return int(math.floor(limit))


def _process_row(processor: RowProcessor, record: Dict[str, str], row_num: int) -> RowResult:
    """Run the processor on one record, converting failures into an ERROR result."""
    try:
        return processor.process(record)
    except Exception as e:
        error = str(e) or type(e).__name__
        logger.error(f"Row {row_num}: processing failed: {error}")
        logger.debug("Full error details:", exc_info=True)
        return RowResult(status=RowStatus.ERROR, result="", error=error)


def _finish(
    summary: RunSummary,
    output_records: List[Dict[str, str]],
    summary_sink: Optional[SummarySink]
) -> WorkflowResult:
    if summary_sink is not None:
        summary_sink.set_value(summary.to_dict())
    return WorkflowResult(summary=summary, output_records=output_records)


def run_ocr_targets_workflow(
    raw_text: Optional[str],
    max_rows: Any = None,
    *,
    processor: Optional[RowProcessor] = None,
    row_sink: Optional[RowSink] = None,
    summary_sink: Optional[SummarySink] = None,
    config: Optional[WorkflowConfig] = None,
    progress_tracker: Optional[ProgressTracker] = None,
    tokenizer: Tokenizer = parse_csv
) -> WorkflowResult:
    """
    Parse an OCR targets CSV payload and process its rows.

    Missing input and tokenizer failures are reported through the summary
    (ok=False) rather than raised. A row whose processing fails is marked
    ERROR and the run carries on. Sink failures are not caught.

    Args:
        raw_text: CSV payload; None or blank text ends the run as NO_CSV
        max_rows: Optional cap on the number of rows processed
        processor: Per-row processing backend (default: NotImplementedProcessor)
        row_sink: Destination for output records (optional)
        summary_sink: Destination for the run summary (optional)
        config: Emission and field mapping settings (default: WorkflowConfig())
        progress_tracker: Optional progress tracker for UI updates
        tokenizer: CSV tokenizer (default: parse_csv)

    Returns:
        WorkflowResult with the run summary and output records in input order

    Raises:
        SinkError: If a sink cannot store its data (fatal to the run)
    """
    config = config or WorkflowConfig()
    processor = processor or NotImplementedProcessor()
    csv_text = '' if raw_text is None else str(raw_text)

    log_section_header("OCR TARGETS INGEST")
    logger.info(f"CSV provided: {bool(csv_text)}")
    logger.info(f"CSV length: {len(csv_text)}")
    logger.info(f"Max files: {max_rows}")
    logger.info(f"Emission: {config.emission.value}")
    logger.info(f"Field mapping: {config.field_mapping.value}")
    logger.info(f"Processor: {processor.name}")

    parse_stage = CsvParsingStage()
    row_stage = RowProcessingStage()
    if progress_tracker:
        progress_tracker.add_stage(parse_stage)
        progress_tracker.add_stage(row_stage)

    # Step 1: input check
    if not csv_text.strip():
        logger.warning("No OCR targets CSV provided or it is empty - exiting")
        parse_stage.skip("No CSV provided")
        row_stage.skip("No CSV provided")
        summary = RunSummary(
            ok=False,
            reason=RunReason.NO_CSV,
            message="No OCR targets CSV provided.",
            max_files=max_rows,
        )
        return _finish(summary, [], summary_sink)

    # Step 2: tokenize
    parse_stage.start_parsing(len(csv_text))
    try:
        matrix = tokenizer(csv_text)
    except Exception as e:
        logger.error(f"Failed to parse CSV: {e}")
        logger.debug("Full error details:", exc_info=True)
        parse_stage.fail(str(e), "Failed to parse CSV")
        row_stage.skip("CSV could not be parsed")
        summary = RunSummary(
            ok=False,
            reason=RunReason.PARSE_ERROR,
            message="Failed to parse OCR targets CSV.",
            error=str(e),
            max_files=max_rows,
        )
        return _finish(summary, [], summary_sink)

    # Step 3: project into records
    record_set = matrix_to_records(matrix)
    total_rows = record_set.total_records
    parse_stage.complete_parsing(len(matrix), total_rows, record_set.skipped_rows)

    # Step 4: cap
    limit = resolve_row_limit(max_rows, total_rows)
    selected = record_set.records[:limit]

    logger.info(f"Headers: {record_set.headers}")
    logger.info(f"Total rows: {total_rows}")
    logger.info(f"Row limit: {limit}")
    if record_set.skipped_rows:
        logger.info(f"Blank rows skipped: {record_set.skipped_rows}")

    if config.field_mapping == FieldMapping.IDENTITY:
        shadowed = [h for h in record_set.headers if h in STATUS_FIELDS]
        if shadowed:
            logger.warning(f"Input columns {shadowed} are overwritten by row status fields")

    # Step 5: per-row processing
    row_stage.start_rows(total_rows, limit)
    output_records: List[Dict[str, str]] = []
    processed_count = 0
    error_count = 0

    for row_idx, record in enumerate(selected, start=1):
        mapped = apply_field_mapping(record, record_set.headers, config.field_mapping)
        result = _process_row(processor, mapped, row_idx)

        if result.status == RowStatus.ERROR:
            error_count += 1
        else:
            processed_count += 1

        output_record = {**mapped, **result.to_fields()}
        output_records.append(output_record)
        logger.debug(f"Row {row_idx}/{limit}: {result.status.value}")

        if row_sink is not None and config.emission == EmissionMode.PER_ROW:
            row_sink.push_data(output_record)

        row_stage.update_row(row_idx, processed_count, error_count)

    if row_sink is not None and config.emission == EmissionMode.BATCH and output_records:
        row_sink.push_data(list(output_records))

    row_stage.complete_rows(processed_count, error_count)

    # Step 6: summary
    summary = RunSummary(
        ok=True,
        reason=RunReason.COMPLETED,
        message=COMPLETED_MESSAGE if isinstance(processor, NotImplementedProcessor) else PROCESSED_MESSAGE,
        max_files=max_rows,
        headers=record_set.headers,
        total_rows=total_rows,
        processed_rows=len(selected),
        processed_count=processed_count,
        error_count=error_count,
    )

    log_section_header("RUN SUMMARY")
    logger.info(f"Total rows: {summary.total_rows}")
    logger.info(f"Processed rows: {summary.processed_rows}")
    logger.info(f"Completed: {summary.processed_count}")
    if error_count:
        logger.warning(f"{error_count} row(s) failed processing")

    return _finish(summary, output_records, summary_sink)
