"""
CSV Parsing Stage

Progress tracking for tokenizing the payload and building records.
"""

from ocr_targets.progress.core.stage import ProgressStage


class CsvParsingStage(ProgressStage):
    """
    Progress stage for CSV parsing.

    Tracks:
    - Payload size
    - Matrix rows produced by the tokenizer
    - Records kept and blank rows skipped
    """

    def __init__(self) -> None:
        super().__init__(
            name="csv_parsing",
            description="Parsing OCR targets CSV"
        )

    def start_parsing(self, text_length: int) -> None:
        self.start(total=1, message=f"Tokenizing {text_length} character(s)")
        self.update_progress(details={"text_length": text_length})

    def complete_parsing(self, matrix_rows: int, total_records: int, skipped_rows: int) -> None:
        self.update_progress(
            details={
                "matrix_rows": matrix_rows,
                "total_records": total_records,
                "skipped_rows": skipped_rows,
            }
        )
        self.complete(f"{total_records} record(s), {skipped_rows} blank row(s) skipped")
