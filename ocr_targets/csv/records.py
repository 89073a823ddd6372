"""
CSV Records Module

Projects a tokenized CSV matrix into a header list and header-keyed
records, skipping rows whose cells are all blank.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

Record = Dict[str, str]


@dataclass
class CsvRecordSet:
    """
    Header-keyed view of a CSV matrix.

    Attributes:
        headers: Trimmed header names from the first row (may repeat)
        records: One dict per non-blank data row, in input order
        skipped_rows: Number of data rows dropped as blank
    """
    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)
    skipped_rows: int = 0

    @property
    def total_records(self) -> int:
        return len(self.records)

    def __str__(self) -> str:
        """String representation for logging."""
        return (
            f"CsvRecordSet(headers={len(self.headers)}, "
            f"records={self.total_records}, "
            f"skipped_rows={self.skipped_rows})"
        )


def _cell_to_str(value: Any) -> str:
    return '' if value is None else str(value)


def is_blank_row(row: Optional[Sequence[Any]]) -> bool:
    """Check whether a row is absent or every cell is empty after trimming."""
    if not row:
        return True
    return all(_cell_to_str(cell).strip() == '' for cell in row)


def matrix_to_records(matrix: Sequence[Optional[Sequence[Any]]]) -> CsvRecordSet:
    """
    Convert a CSV matrix into headers and header-keyed records.

    The first row is the header row. Each later row is zipped positionally
    against the headers: a header without a cell maps to an empty string and
    cells beyond the header length are ignored. Duplicate headers keep the
    value of the last matching column.

    Args:
        matrix: Rows of cells as produced by parse_csv()

    Returns:
        CsvRecordSet with headers, records and the blank-row count
    """
    if not matrix:
        return CsvRecordSet()

    headers = [_cell_to_str(h).strip() for h in (matrix[0] or [])]
    record_set = CsvRecordSet(headers=headers)

    for row_num, row in enumerate(matrix[1:], start=2):  # Header is row 1
        if is_blank_row(row):
            record_set.skipped_rows += 1
            logger.debug(f"Row {row_num}: Skipping blank row")
            continue

        record: Record = {}
        for idx, header in enumerate(headers):
            record[header] = _cell_to_str(row[idx]) if idx < len(row) else ''
        record_set.records.append(record)

    logger.debug(f"Built {record_set}")
    return record_set
