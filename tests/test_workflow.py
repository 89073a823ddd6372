import logging

import pytest

from ocr_targets.exceptions import CsvParseError, RowProcessingError, SinkError
from ocr_targets.mapping.canonical import CANONICAL_FIELDS, FieldMapping
from ocr_targets.processing.base import RowProcessor, RowResult, RowStatus
from ocr_targets.sinks.base import RowSink
from ocr_targets.sinks.memory import MemoryRowSink, MemorySummarySink
from ocr_targets.workflows.ocr_targets import (
    EmissionMode,
    WorkflowConfig,
    resolve_row_limit,
    run_ocr_targets_workflow,
)
from ocr_targets.workflows.summary import COMPLETED_MESSAGE, PROCESSED_MESSAGE, RunReason

IDENTITY = WorkflowConfig(field_mapping=FieldMapping.IDENTITY)

SAMPLE_CSV = "h1,h2\n1,\"a,b\"\n2,c\n"


class FailingOnRowProcessor(RowProcessor):
    """Raises for the record whose 'id' matches."""

    name = "failing"

    def __init__(self, failing_id):
        self.failing_id = failing_id
        self.seen = []

    def process(self, record):
        self.seen.append(record["id"])
        if record["id"] == self.failing_id:
            raise RowProcessingError(f"cannot read attachment {record['id']}")
        return RowResult(status=RowStatus.DONE, result=f"text-{record['id']}")


class BrokenSink(RowSink):
    def push_data(self, data):
        raise SinkError("dataset unavailable")


@pytest.mark.parametrize("raw_text", ["", "   \n\t", None])
def test_missing_csv_ends_run_with_no_csv(raw_text):
    summary_sink = MemorySummarySink()
    row_sink = MemoryRowSink()

    result = run_ocr_targets_workflow(raw_text, 5, row_sink=row_sink, summary_sink=summary_sink)

    assert result.summary.ok is False
    assert result.summary.reason == RunReason.NO_CSV
    assert result.summary.processed_rows == 0
    assert result.output_records == []
    assert row_sink.push_calls == 0
    assert summary_sink.writes == 1
    assert summary_sink.value["reason"] == "NO_CSV"
    assert summary_sink.value["max_files"] == 5


def test_missing_csv_does_not_call_tokenizer():
    def tokenizer(text):
        raise AssertionError("tokenizer should not run")

    result = run_ocr_targets_workflow("", tokenizer=tokenizer)

    assert result.summary.reason == RunReason.NO_CSV


def test_tokenizer_failure_reports_parse_error():
    def strict_tokenizer(text):
        raise CsvParseError("unterminated quote at line 3")

    summary_sink = MemorySummarySink()
    row_sink = MemoryRowSink()

    result = run_ocr_targets_workflow(
        "a,b\n1,2", row_sink=row_sink, summary_sink=summary_sink, tokenizer=strict_tokenizer
    )

    assert result.summary.ok is False
    assert result.summary.reason == RunReason.PARSE_ERROR
    assert result.summary.error == "unterminated quote at line 3"
    assert result.output_records == []
    assert row_sink.items == []
    assert summary_sink.value["error"] == "unterminated quote at line 3"


def test_cap_of_one_with_quoted_comma():
    result = run_ocr_targets_workflow(SAMPLE_CSV, 1, config=IDENTITY)

    assert len(result.output_records) == 1
    record = result.output_records[0]
    assert record["h1"] == "1"
    assert record["h2"] == "a,b"
    assert result.summary.total_rows == 2
    assert result.summary.processed_rows == 1
    assert result.summary.headers == ["h1", "h2"]


def test_zero_cap_processes_nothing_but_reports_totals():
    summary_sink = MemorySummarySink()

    result = run_ocr_targets_workflow(SAMPLE_CSV, 0, summary_sink=summary_sink)

    assert result.output_records == []
    assert result.summary.ok is True
    assert result.summary.total_rows == 2
    assert result.summary.processed_rows == 0
    assert summary_sink.writes == 1


def test_no_cap_processes_all_rows():
    result = run_ocr_targets_workflow(SAMPLE_CSV)

    assert result.summary.processed_rows == 2
    assert result.summary.max_files is None


def test_default_processor_marks_rows_skipped():
    result = run_ocr_targets_workflow(SAMPLE_CSV, config=IDENTITY)

    for record in result.output_records:
        assert record["ocr_status"] == "SKIPPED"
        assert record["ocr_result"] == ""
        assert record["ocr_error"] == "not implemented yet"
    assert result.summary.processed_count == 2
    assert result.summary.error_count == 0


def test_blank_rows_never_reach_output():
    result = run_ocr_targets_workflow("h1,h2\n1,2\n,,\n3,4\n", config=IDENTITY)

    assert [r["h1"] for r in result.output_records] == ["1", "3"]
    assert result.summary.total_rows == 2


def test_short_row_is_kept_with_empty_fields():
    result = run_ocr_targets_workflow("h1,h2,h3\n1\n", config=IDENTITY)

    assert result.output_records[0]["h2"] == ""
    assert result.output_records[0]["h3"] == ""


def test_row_failure_is_isolated(caplog):
    processor = FailingOnRowProcessor("2")
    row_sink = MemoryRowSink()

    with caplog.at_level(logging.ERROR):
        result = run_ocr_targets_workflow(
            "id\n1\n2\n3\n", processor=processor, row_sink=row_sink, config=IDENTITY
        )

    assert processor.seen == ["1", "2", "3"]
    statuses = [r["ocr_status"] for r in result.output_records]
    assert statuses == ["DONE", "ERROR", "DONE"]
    assert result.output_records[0]["ocr_result"] == "text-1"
    assert result.output_records[1]["ocr_result"] == ""
    assert result.output_records[1]["ocr_error"] == "cannot read attachment 2"
    assert result.output_records[2]["ocr_error"] == ""
    assert result.summary.ok is True
    assert result.summary.error_count == 1
    assert result.summary.processed_count == 2
    assert row_sink.items == result.output_records
    assert "cannot read attachment 2" in caplog.text


def test_unexpected_processor_exception_is_isolated_too():
    class Exploding(RowProcessor):
        def process(self, record):
            raise KeyError("Attachment_ID")

    result = run_ocr_targets_workflow("a\n1\n2\n", processor=Exploding())

    assert [r["ocr_status"] for r in result.output_records] == ["ERROR", "ERROR"]
    assert result.summary.error_count == 2
    assert result.summary.ok is True


def test_per_row_emission_pushes_each_record():
    row_sink = MemoryRowSink()

    result = run_ocr_targets_workflow(SAMPLE_CSV, row_sink=row_sink)

    assert row_sink.push_calls == 2
    assert row_sink.items == result.output_records


def test_batch_emission_pushes_once():
    row_sink = MemoryRowSink()
    config = WorkflowConfig(emission=EmissionMode.BATCH)

    result = run_ocr_targets_workflow(SAMPLE_CSV, row_sink=row_sink, config=config)

    assert row_sink.push_calls == 1
    assert row_sink.items == result.output_records


def test_batch_emission_skips_empty_batch():
    row_sink = MemoryRowSink()
    config = WorkflowConfig(emission=EmissionMode.BATCH)

    run_ocr_targets_workflow(SAMPLE_CSV, 0, row_sink=row_sink, config=config)

    assert row_sink.push_calls == 0


def test_canonical_mapping_is_default():
    text = "c1,c2,c3\nINV-1,LI-1,ATT-1\n"

    result = run_ocr_targets_workflow(text)

    record = result.output_records[0]
    assert list(record)[:12] == CANONICAL_FIELDS
    assert record["Invoice_ID"] == "INV-1"
    assert record["Attachment_ID"] == "ATT-1"
    assert record["Target_type"] == ""
    assert record["ocr_status"] == "SKIPPED"


def test_rerun_is_identical():
    first = run_ocr_targets_workflow(SAMPLE_CSV, 1)
    second = run_ocr_targets_workflow(SAMPLE_CSV, 1)

    assert first.output_records == second.output_records
    assert first.summary.to_dict() == second.summary.to_dict()


def test_sink_failure_propagates():
    with pytest.raises(SinkError):
        run_ocr_targets_workflow(SAMPLE_CSV, row_sink=BrokenSink())


@pytest.mark.parametrize(
    "max_rows, expected",
    [
        (None, 5),
        (2, 2),
        ("3", 3),
        (" 4 ", 4),
        (2.7, 2),
        (-1, 0),
        (0, 0),
        (99, 5),
        (float("inf"), 5),
        (float("nan"), 5),
        ("abc", 5),
        ("", 5),
        ([1], 5),
        (10 ** 400, 5),
        (-(10 ** 400), 0),
    ],
)
def test_resolve_row_limit(max_rows, expected):
    assert resolve_row_limit(max_rows, 5) == expected


def test_summary_message_reflects_processor():
    stubbed = run_ocr_targets_workflow(SAMPLE_CSV)
    processed = run_ocr_targets_workflow(
        "id\n1\n", processor=FailingOnRowProcessor("x"), config=IDENTITY
    )

    assert stubbed.summary.message == COMPLETED_MESSAGE
    assert processed.summary.message == PROCESSED_MESSAGE


def test_cap_beyond_float_range_processes_all_rows():
    result = run_ocr_targets_workflow("a\n1\n2\n", 10 ** 400)

    assert result.summary.ok is True
    assert result.summary.processed_rows == 2


def test_exception_without_message_still_reports_error():
    class Silent(RowProcessor):
        def process(self, record):
            raise RowProcessingError()

    result = run_ocr_targets_workflow("a\n1\n", processor=Silent())

    record = result.output_records[0]
    assert record["ocr_status"] == "ERROR"
    assert record["ocr_error"] == "RowProcessingError"


def test_status_fields_replace_same_named_columns_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        result = run_ocr_targets_workflow("id,ocr_status\n1,pending\n", config=IDENTITY)

    assert result.output_records[0]["ocr_status"] == "SKIPPED"
    assert "['ocr_status'] are overwritten by row status fields" in caplog.text


def test_canonical_mapping_does_not_warn_about_status_columns(caplog):
    with caplog.at_level(logging.WARNING):
        run_ocr_targets_workflow("id,ocr_status\n1,pending\n")

    assert "overwritten by row status fields" not in caplog.text
